"""Passthrough extractor for plain-text formats (.md, .txt, .json, anything unknown)."""

from __future__ import annotations

import structlog

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.models.document import SourceFile
from docprompt.utils.errors import UnreadableDocumentError

logger = structlog.get_logger(logger_name=__name__)


class PlainTextExtractor(IDocumentExtractor):
    """Returns the file's UTF-8 content verbatim, with no structural parsing."""

    def extract(self, source: SourceFile) -> str:
        try:
            # read_bytes + decode keeps "\r\n" intact; read_text would translate it.
            text = source.path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise UnreadableDocumentError(source.path, exc) from exc

        logger.debug("plain_text_read", path=str(source.path), chars=len(text))
        return text

    def get_format_name(self) -> str:
        return "text"
