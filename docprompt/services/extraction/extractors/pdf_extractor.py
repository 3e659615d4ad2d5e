"""Extractor for PDF documents.

Reads the PDF's text layer page-by-page with PyMuPDF (fitz) and joins pages
with a blank line, in page order.  There is no OCR fallback: a scanned PDF
yields an empty or near-empty body, which is logged but not treated as an
error.
"""

from __future__ import annotations

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.models.document import SourceFile
from docprompt.utils.errors import UnreadableDocumentError

logger = structlog.get_logger(logger_name=__name__)


class PdfExtractor(IDocumentExtractor):
    """Flattens a PDF text layer into page-separated text."""

    def extract(self, source: SourceFile) -> str:
        pages = self._extract_pages(source)
        if not pages:
            logger.warning("pdf_no_text_extracted", path=str(source.path))
            return ""

        logger.info("pdf_extracted", path=str(source.path), pages=len(pages))
        return "\n\n".join(pages)

    @staticmethod
    def _extract_pages(source: SourceFile) -> list[str]:
        """Return the stripped text of each page that has any.

        The whole file is read into memory first so that a truncated or
        locked file fails here, inside the error wrapper, rather than
        half-way through page iteration.
        """
        try:
            data = source.path.read_bytes()
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:  # noqa: BLE001 -- fitz raises several unrelated types
            logger.error("pdf_open_failed", path=str(source.path), error=str(exc))
            raise UnreadableDocumentError(source.path, exc, provider_name="pymupdf") from exc

        pages: list[str] = []
        try:
            if doc.needs_pass:
                raise UnreadableDocumentError(
                    source.path, "document is password protected", provider_name="pymupdf"
                )
            for page in doc:
                text = page.get_text("text").strip()
                if text:
                    pages.append(text)
        except UnreadableDocumentError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise UnreadableDocumentError(source.path, exc, provider_name="pymupdf") from exc
        finally:
            doc.close()

        return pages

    def get_format_name(self) -> str:
        return "pdf"
