"""Extractor for PowerPoint decks (.pptx).

Slides live in the package as ``ppt/slides/slide{N}.xml``.  Archive order is
meaningless, so each slide's ordinal is parsed from the numeric suffix of its
member path and the slides are sorted numerically (1, 2, 10 rather than 1,
10, 2).  A member whose suffix cannot be parsed gets ordinal 0; the sort is
stable, so such slides keep their archive order relative to each other and
land ahead of numbered slides.

Every slide's ``a:t`` runs are whitespace-collapsed and joined one per line,
then labelled ``-- Slide {n} --`` where ``n`` is the 1-based position in the
sorted sequence (not the parsed ordinal).  Slides are separated by a blank
line.  A deck with no slide parts yields an empty body.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

import structlog

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.models.document import PackageMember, SourceFile
from docprompt.services.extraction.package_reader import PackageReader
from docprompt.services.extraction.xml_tree import (
    SLIDE_TEXT_RUN_TAG,
    TextRunCollector,
    parse_xml,
)
from docprompt.utils.errors import ContainerEmptyError, UnreadableDocumentError
from docprompt.utils.text_normalizer import normalize_lines

logger = structlog.get_logger(logger_name=__name__)

SLIDE_PREFIX = "ppt/slides/slide"
_SLIDE_NUMBER = re.compile(r"slide(\d+)\.xml$")


def is_slide_part(member_path: str) -> bool:
    """True for ``ppt/slides/slide*.xml`` parts (relationship parts excluded)."""
    return member_path.startswith(SLIDE_PREFIX) and member_path.endswith(".xml")


def slide_ordinal(member_path: str) -> int:
    """Numeric suffix of a slide part path, or 0 when there is none."""
    match = _SLIDE_NUMBER.search(member_path)
    return int(match.group(1)) if match else 0


def order_slides(members: list[PackageMember]) -> list[PackageMember]:
    """Attach ordinal hints and sort ascending by them (stable)."""
    hinted = [
        member.model_copy(update={"ordinal_hint": slide_ordinal(member.member_path)})
        for member in members
    ]
    return sorted(hinted, key=lambda member: member.ordinal_hint or 0)


class PptxExtractor(IDocumentExtractor):
    """Turns a .pptx package into labelled per-slide text blocks."""

    def __init__(self, reader: PackageReader | None = None) -> None:
        self._reader = reader or PackageReader()
        self._runs = TextRunCollector(SLIDE_TEXT_RUN_TAG)

    def extract(self, source: SourceFile) -> str:
        try:
            members = self._reader.read_members(source.path, is_slide_part, description="slides")
        except ContainerEmptyError:
            logger.info("pptx_no_slides", path=str(source.path))
            return ""

        blocks: list[str] = []
        for position, member in enumerate(order_slides(members), start=1):
            try:
                root = parse_xml(member.data)
            except ET.ParseError as exc:
                raise UnreadableDocumentError(
                    source.path, f"{member.member_path}: {exc}"
                ) from exc
            lines = normalize_lines(self._runs.collect(root))
            blocks.append(f"-- Slide {position} --\n" + "\n".join(lines))

        logger.info("pptx_extracted", path=str(source.path), slides=len(blocks))
        return "\n\n".join(blocks)

    def get_format_name(self) -> str:
        return "pptx"
