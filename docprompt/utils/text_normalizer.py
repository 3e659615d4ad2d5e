"""Text normalization helpers shared by the format extractors.

Packaged formats (DOCX, PPTX) store text in many small runs whose
whitespace is an artefact of the authoring tool, not of the content.
These helpers flatten that whitespace while keeping the line structure
that callers build on top of it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str | None) -> str:
    """Collapse every whitespace run to one space and trim the ends.

    ``None`` is treated as an empty string so callers can pass missing
    text-run values straight through.
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def normalize_lines(values: Iterable[str | None]) -> list[str]:
    """Collapse and trim each value, dropping entries that end up empty.

    Args:
        values: Raw text-run values in document order.

    Returns:
        The cleaned, non-empty values in the same order.
    """
    lines: list[str] = []
    for value in values:
        cleaned = collapse_whitespace(value)
        if cleaned:
            lines.append(cleaned)
    return lines
