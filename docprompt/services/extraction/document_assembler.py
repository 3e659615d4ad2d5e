"""Combines several input documents into one labelled prompt text.

# ─── BATCH SEMANTICS ──────────────────────────────────────────────────
#
#   1. Resolve   -- every path is made absolute and checked for existence
#                  BEFORE any extraction starts.  One missing file aborts
#                  the whole batch and nothing is read.
#   2. Extract   -- files are processed strictly one after another, in the
#                  order given.  Each extraction is blocking I/O + parsing,
#                  so it runs in a worker thread (asyncio.to_thread) and is
#                  awaited before the next one begins.
#   3. Combine   -- each body is wrapped as "### {name}\n{body}" and the
#                  blocks are joined with a blank line.
#
# The first extraction failure propagates immediately; files after it are
# never started.  The caller either gets the full combination or an error,
# never a partial prompt.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import structlog

from docprompt.models.document import CombinedPrompt, ExtractedText, SourceFile
from docprompt.services.extraction.extractors import ExtractorRegistry
from docprompt.utils.errors import DocumentNotFoundError, UnreadableDocumentError

logger = structlog.get_logger(logger_name=__name__)


class DocumentAssembler:
    """Builds a :class:`CombinedPrompt` from an ordered list of file paths.

    Parameters
    ----------
    registry:
        Extension-to-extractor mapping.  Defaults to every supported format.
    """

    def __init__(self, registry: ExtractorRegistry | None = None) -> None:
        self._registry = registry or ExtractorRegistry.with_defaults()

    def resolve(self, paths: Sequence[str | Path], base_dir: str | Path | None = None) -> list[SourceFile]:
        """Resolve and existence-check every path, preserving order.

        Raises
        ------
        DocumentNotFoundError
            For the first path that does not exist (or is not a regular file).
        """
        root = Path(base_dir) if base_dir is not None else Path.cwd()
        sources: list[SourceFile] = []
        for raw in paths:
            candidate = Path(raw).expanduser()
            if not candidate.is_absolute():
                candidate = root / candidate
            absolute = candidate.resolve()
            if not absolute.is_file():
                logger.error("document_not_found", path=str(absolute))
                raise DocumentNotFoundError(absolute)
            sources.append(SourceFile.from_path(absolute))
        return sources

    def extract_one(self, source: SourceFile) -> ExtractedText:
        """Run the extractor selected by ``source.extension``."""
        extractor = self._registry.for_extension(source.extension)
        body = extractor.extract(source)
        logger.info(
            "document_extracted",
            path=str(source.path),
            format=extractor.get_format_name(),
            chars=len(body),
        )
        return ExtractedText(source_name=source.display_name, body=body)

    async def assemble(
        self,
        paths: Sequence[str | Path],
        base_dir: str | Path | None = None,
    ) -> CombinedPrompt:
        """Extract every file in order and combine them.

        Parameters
        ----------
        paths:
            Input files, absolute or relative to ``base_dir``.
        base_dir:
            Directory relative paths are resolved against (default: CWD).

        Returns
        -------
        CombinedPrompt
            One :class:`ExtractedText` per input, in input order.

        Raises
        ------
        DocumentNotFoundError
            If any path is missing; raised before anything is extracted.
        UnreadableDocumentError
            If any file fails to parse; later files are not attempted.
        """
        sources = self.resolve(paths, base_dir)

        documents: list[ExtractedText] = []
        for source in sources:
            try:
                documents.append(await asyncio.to_thread(self.extract_one, source))
            except UnreadableDocumentError:
                logger.error(
                    "batch_aborted",
                    failed=str(source.path),
                    completed=len(documents),
                    abandoned=len(sources) - len(documents) - 1,
                )
                raise

        return CombinedPrompt(documents=tuple(documents))

    async def assemble_text(
        self,
        paths: Sequence[str | Path],
        base_dir: str | Path | None = None,
    ) -> str:
        """Same as :meth:`assemble` but returns the combined string."""
        return (await self.assemble(paths, base_dir)).text
