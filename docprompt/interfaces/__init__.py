"""Public interface definitions for extractors and generation providers.

Business logic depends only on these abstract base classes; concrete
adapters are chosen in ``docprompt/main.py`` and injected, so tests can swap
in fakes without touching the network or the filesystem.

CONCRETE IMPLEMENTATION MAP:
    Interface              →  Concrete implementations
    ───────────────────────────────────────────────────────────────
    IDocumentExtractor     →  PlainTextExtractor, DocxExtractor,
                              PdfExtractor, PptxExtractor
    IGenerationProvider    →  OllamaGenerationProvider
"""

from docprompt.interfaces.document_extractor import IDocumentExtractor
from docprompt.interfaces.llm_provider import IGenerationProvider

__all__ = ["IDocumentExtractor", "IGenerationProvider"]
