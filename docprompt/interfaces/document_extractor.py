"""Abstract base class for per-format document extractors.

Each concrete extractor turns one resolved :class:`SourceFile` into a single
normalized text string.  The registry in
``docprompt/services/extraction/extractors/__init__.py`` picks one by file
extension.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docprompt.models.document import SourceFile


# Concrete implementations: PlainTextExtractor, DocxExtractor, PdfExtractor, PptxExtractor
# Located in: docprompt/services/extraction/extractors/
class IDocumentExtractor(ABC):
    """Contract for format-specific text extraction."""

    @abstractmethod
    def extract(self, source: SourceFile) -> str:
        """Return the flattened text of ``source``.

        Parameters
        ----------
        source:
            The resolved input file.

        Returns
        -------
        str
            Extracted text.  May be empty; an empty body is not an error.

        Raises
        ------
        docprompt.utils.errors.UnreadableDocumentError
            If the file cannot be parsed in its declared format.
        """

    @abstractmethod
    def get_format_name(self) -> str:
        """Return a short identifier for the handled format, e.g. ``"docx"``."""
