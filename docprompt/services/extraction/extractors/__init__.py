"""Format-specific extractors and the extension-based registry.

Dispatch table (suffix match is case-insensitive):

    .docx                       -> DocxExtractor   (packaged XML, w:t runs)
    .pdf                        -> PdfExtractor    (PyMuPDF text layer)
    .pptx                       -> PptxExtractor   (packaged XML, a:t runs per slide)
    .md .txt .json, everything  -> PlainTextExtractor (verbatim UTF-8)
    else

Pattern: Strategy (suffix -> extractor dispatch).
"""

from __future__ import annotations

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.services.extraction.extractors.docx_extractor import DocxExtractor
from docprompt.services.extraction.extractors.pdf_extractor import PdfExtractor
from docprompt.services.extraction.extractors.plain_text_extractor import PlainTextExtractor
from docprompt.services.extraction.extractors.pptx_extractor import PptxExtractor
from docprompt.services.extraction.package_reader import PackageReader


class ExtractorRegistry:
    """Maps file suffixes to extractors, falling back to a default."""

    def __init__(
        self,
        extractors: dict[str, IDocumentExtractor] | None = None,
        default: IDocumentExtractor | None = None,
    ) -> None:
        self._extractors = {suffix.lower(): ex for suffix, ex in (extractors or {}).items()}
        self._default = default or PlainTextExtractor()

    @classmethod
    def with_defaults(cls) -> ExtractorRegistry:
        """Registry covering every supported format."""
        reader = PackageReader()
        plain = PlainTextExtractor()
        return cls(
            extractors={
                ".md": plain,
                ".txt": plain,
                ".json": plain,
                ".docx": DocxExtractor(reader),
                ".pdf": PdfExtractor(),
                ".pptx": PptxExtractor(reader),
            },
            default=plain,
        )

    def for_extension(self, extension: str) -> IDocumentExtractor:
        """Extractor for ``extension`` (with or without the leading dot)."""
        suffix = extension.lower()
        if suffix and not suffix.startswith("."):
            suffix = f".{suffix}"
        return self._extractors.get(suffix, self._default)

    @property
    def supported_extensions(self) -> list[str]:
        return sorted(self._extractors)


__all__ = [
    "DocxExtractor",
    "ExtractorRegistry",
    "PdfExtractor",
    "PlainTextExtractor",
    "PptxExtractor",
]
