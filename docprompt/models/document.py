"""Document extraction data models.

Defines Pydantic v2 models for the inputs and outputs of the extraction
stage: the resolved source file, the text pulled out of it, a raw member of a
ZIP-packaged document, and the combined prompt built from several files.
All models use frozen config so a value cannot change after it has been
resolved or extracted.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# SourceFile -- one resolved input path.
# ---------------------------------------------------------------------------
class SourceFile(BaseModel):
    """An input file after path resolution and existence checking.

    Built by :class:`~docprompt.services.extraction.document_assembler.DocumentAssembler`
    and consumed exactly once by the extractor selected for ``extension``.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Absolute filesystem path.")
    extension: str = Field(description='Lowercase suffix including the dot, e.g. ".docx".')
    display_name: str = Field(description="Base filename used in the prompt header.")

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        """Build a SourceFile from an already-absolute path."""
        return cls(path=path, extension=path.suffix.lower(), display_name=path.name)


# ---------------------------------------------------------------------------
# ExtractedText -- the normalized text of one SourceFile.
# ---------------------------------------------------------------------------
class ExtractedText(BaseModel):
    """Flattened text extracted from one source file.

    ``body`` never contains container markup.  An empty body is valid (a
    scanned PDF has no text layer).
    """

    model_config = ConfigDict(frozen=True)

    source_name: str = Field(description="Display name of the originating file.")
    body: str = Field(default="", description="Extracted, order-preserving text.")

    def as_block(self) -> str:
        """Render as a labelled prompt block: ``### {source_name}\\n{body}``."""
        return f"### {self.source_name}\n{self.body}"


# ---------------------------------------------------------------------------
# CombinedPrompt -- ordered concatenation of several ExtractedText blocks.
# ---------------------------------------------------------------------------
class CombinedPrompt(BaseModel):
    """All extracted documents, in the order the caller listed them."""

    model_config = ConfigDict(frozen=True)

    documents: tuple[ExtractedText, ...] = Field(default=())

    @property
    def text(self) -> str:
        """Labelled blocks joined by a blank line."""
        return "\n\n".join(doc.as_block() for doc in self.documents)

    @property
    def source_names(self) -> list[str]:
        return [doc.source_name for doc in self.documents]


# ---------------------------------------------------------------------------
# PackageMember -- one XML part inside a ZIP container (.docx / .pptx).
# ---------------------------------------------------------------------------
class PackageMember(BaseModel):
    """Raw bytes of one member of a packaged XML document.

    ``ordinal_hint`` is filled in by callers that need a semantic order
    (slide numbers); the reader itself leaves it as ``None``.
    """

    model_config = ConfigDict(frozen=True)

    member_path: str = Field(description='Path inside the archive, e.g. "ppt/slides/slide3.xml".')
    ordinal_hint: int | None = Field(default=None, description="Sort key derived from the member path.")
    data: bytes = Field(default=b"", repr=False, description="Uncompressed member contents.")
