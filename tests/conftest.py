"""Shared pytest fixtures for the docprompt test suite.

Documents are built for real in ``tmp_path``: .docx and .pptx packages are
written with ``zipfile`` and PDFs with PyMuPDF, so the extractors run
against the same byte layouts they see in production.
"""

from __future__ import annotations

import zipfile
from collections.abc import AsyncIterator, Callable, Sequence
from pathlib import Path

import fitz
import pytest

from docprompt.config.settings import Settings

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
P_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"

_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"/>'
)


# ---------------------------------------------------------------------------
# Document builders
# ---------------------------------------------------------------------------


def word_paragraph(*runs: str) -> str:
    """A ``w:p`` element whose runs carry the given texts.

    A run of ``"\\t"`` becomes ``<w:tab/>`` and ``"\\n"`` becomes ``<w:br/>``.
    """
    parts = []
    for run in runs:
        if run == "\t":
            parts.append("<w:r><w:tab/></w:r>")
        elif run == "\n":
            parts.append("<w:r><w:br/></w:r>")
        else:
            parts.append(f'<w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve">{run}</w:t></w:r>')
    return "<w:p><w:pPr><w:pStyle w:val=\"Normal\"/></w:pPr>" + "".join(parts) + "</w:p>"


def word_document_xml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}<w:sectPr/></w:body></w:document>'
    )


def write_docx(path: Path, body: str) -> Path:
    """Write a minimal .docx whose body XML is ``body``."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", _CONTENT_TYPES)
        archive.writestr("word/document.xml", word_document_xml(body))
        archive.writestr("word/styles.xml", f'<w:styles xmlns:w="{W_NS}"/>')
    return path


def slide_xml(*texts: str) -> str:
    """A slide part with one text shape per entry of ``texts``."""
    shapes = "".join(
        f"<p:sp><p:txBody><a:p><a:r><a:rPr lang=\"en-US\"/><a:t>{text}</a:t></a:r></a:p></p:txBody></p:sp>"
        for text in texts
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<p:sld xmlns:a="{A_NS}" xmlns:p="{P_NS}"><p:cSld><p:spTree>{shapes}</p:spTree></p:cSld></p:sld>'
    )


def write_pptx(path: Path, slides: Sequence[tuple[str, str]]) -> Path:
    """Write a .pptx with ``(member_path, xml)`` slide parts in the given archive order."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", _CONTENT_TYPES)
        archive.writestr("ppt/presentation.xml", f'<p:presentation xmlns:p="{P_NS}"/>')
        for member_path, xml in slides:
            archive.writestr(member_path, xml)
            rels_path = member_path.replace("ppt/slides/", "ppt/slides/_rels/") + ".rels"
            archive.writestr(rels_path, "<Relationships/>")
    return path


def write_pdf(path: Path, pages: Sequence[str]) -> Path:
    """Write a PDF with one text page per entry (an empty string gives a blank page)."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()
    return path


class OfficeFiles:
    """Writes sample documents into one directory."""

    paragraph = staticmethod(word_paragraph)
    slide = staticmethod(slide_xml)

    def __init__(self, root: Path) -> None:
        self.root = root

    def docx(self, name: str, *paragraphs: str) -> Path:
        """Each entry of ``paragraphs`` becomes one single-run paragraph."""
        return write_docx(self.root / name, "".join(word_paragraph(p) for p in paragraphs))

    def docx_body(self, name: str, body: str) -> Path:
        return write_docx(self.root / name, body)

    def pptx(self, name: str, slides: Sequence[tuple[str, str]]) -> Path:
        return write_pptx(self.root / name, slides)

    def pdf(self, name: str, pages: Sequence[str]) -> Path:
        return write_pdf(self.root / name, pages)

    def text(self, name: str, content: str) -> Path:
        path = self.root / name
        path.write_bytes(content.encode("utf-8"))
        return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def office(tmp_path: Path) -> OfficeFiles:
    """Builder for real .docx/.pptx/.pdf/text files under ``tmp_path``."""
    return OfficeFiles(tmp_path)


@pytest.fixture
def test_settings() -> Settings:
    """Settings pinned to a fake local endpoint."""
    return Settings(
        ollama_url="http://127.0.0.1:11434/api/generate",
        default_model="mistral",
        request_timeout=5.0,
        connect_timeout=1.0,
    )


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    body = word_paragraph("Quarterly ", "report") + word_paragraph("Revenue grew", " 12%")
    return write_docx(tmp_path / "report.docx", body)


@pytest.fixture
def sample_pptx(tmp_path: Path) -> Path:
    return write_pptx(
        tmp_path / "deck.pptx",
        [
            ("ppt/slides/slide2.xml", slide_xml("Second")),
            ("ppt/slides/slide1.xml", slide_xml("Title", "Subtitle")),
        ],
    )


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    return write_pdf(tmp_path / "paper.pdf", ["First page text", "Second page text"])


@pytest.fixture
def sample_txt(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_bytes("Line one\r\n  indented   line\nünïcødé ✓\n".encode("utf-8"))
    return path


@pytest.fixture
def chunk_stream() -> Callable[[Sequence[bytes]], AsyncIterator[bytes]]:
    """Factory for async byte streams that record how many chunks were pulled."""

    def _factory(chunks: Sequence[bytes]) -> AsyncIterator[bytes]:
        return RecordingStream(chunks)

    return _factory


class RecordingStream:
    """Async iterator over fixed chunks; tracks consumption and closing."""

    def __init__(self, chunks: Sequence[bytes]) -> None:
        self._chunks = list(chunks)
        self.pulled = 0
        self.closed = False

    def __aiter__(self) -> RecordingStream:
        return self

    async def __anext__(self) -> bytes:
        if self.closed or self.pulled >= len(self._chunks):
            raise StopAsyncIteration
        chunk = self._chunks[self.pulled]
        self.pulled += 1
        return chunk

    async def aclose(self) -> None:
        self.closed = True
