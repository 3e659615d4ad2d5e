"""Extractor for Word documents (.docx).

Reads the main document part (``word/document.xml``) straight out of the ZIP
container and walks it with :class:`TextRunCollector`.  Each outermost
``w:p`` paragraph becomes one block; its ``w:t`` runs are concatenated with
no separator (Word splits words across runs freely).  Manual line breaks
stay line breaks, tabs and other whitespace inside a line collapse to single
spaces, and paragraphs are joined with a blank line.  Empty paragraphs are
dropped.

Formatting (bold, tables, numbering) is not preserved; table cells simply
contribute their paragraphs in document order.  Text boxes saved as
``mc:AlternateContent`` are read from a single branch, so their text
appears once.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import structlog

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.models.document import SourceFile
from docprompt.services.extraction.package_reader import PackageReader
from docprompt.services.extraction.xml_tree import (
    WORD_BREAK_TAG,
    WORD_CARRIAGE_RETURN_TAG,
    WORD_PARAGRAPH_TAG,
    WORD_TAB_TAG,
    WORD_TEXT_RUN_TAG,
    TextRunCollector,
    XmlElement,
    content_children,
    iter_outermost,
    parse_xml,
)
from docprompt.utils.errors import ContainerEmptyError, UnreadableDocumentError
from docprompt.utils.text_normalizer import normalize_lines

logger = structlog.get_logger(logger_name=__name__)

MAIN_DOCUMENT_PART = "word/document.xml"


class DocxExtractor(IDocumentExtractor):
    """Turns a .docx package into paragraph-separated plain text."""

    def __init__(self, reader: PackageReader | None = None) -> None:
        self._reader = reader or PackageReader()
        self._runs = TextRunCollector(WORD_TEXT_RUN_TAG)

    def extract(self, source: SourceFile) -> str:
        try:
            member = self._reader.read_member(source.path, MAIN_DOCUMENT_PART)
            root = parse_xml(member.data)
        except ContainerEmptyError as exc:
            # A package without a main document part is not a Word file.
            raise UnreadableDocumentError(source.path, exc) from exc
        except ET.ParseError as exc:
            raise UnreadableDocumentError(source.path, exc) from exc

        paragraphs = [
            text
            for text in (self._paragraph_text(p) for p in iter_outermost(root, WORD_PARAGRAPH_TAG))
            if text
        ]

        logger.info("docx_extracted", path=str(source.path), paragraphs=len(paragraphs))
        return "\n\n".join(paragraphs)

    def _paragraph_text(self, paragraph: XmlElement) -> str:
        # Runs hold text; tab and break markers sit between runs as siblings.
        pieces: list[str] = []
        for node in content_children(paragraph):
            if not isinstance(node, XmlElement):
                continue
            pieces.extend(self._run_pieces(node))
        # Collapse whitespace per line; manual breaks survive as line breaks.
        return "\n".join(normalize_lines("".join(pieces).split("\n")))

    def _run_pieces(self, node: XmlElement) -> list[str]:
        if node.tag == WORD_TAB_TAG:
            return ["\t"]
        if node.tag in (WORD_BREAK_TAG, WORD_CARRIAGE_RETURN_TAG):
            return ["\n"]
        if node.tag == WORD_TEXT_RUN_TAG:
            return self._runs.collect(node)
        if node.tag == WORD_PARAGRAPH_TAG:
            # Nested paragraph (text box): keep it on its own line.
            nested = self._paragraph_text(node)
            return [f"\n{nested}\n"] if nested else []
        pieces: list[str] = []
        for child in content_children(node):
            if isinstance(child, XmlElement):
                pieces.extend(self._run_pieces(child))
        return pieces

    def get_format_name(self) -> str:
        return "docx"
