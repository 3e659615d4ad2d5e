"""docprompt domain models — re-exports all public model classes.

The models are organized across two submodules by concern:
    - document.py   — Source files, extracted text, ZIP package members,
                      and the combined prompt
    - generation.py — Generate request body and decoded stream events
"""

from __future__ import annotations

from docprompt.models.document import (
    CombinedPrompt,
    ExtractedText,
    PackageMember,
    SourceFile,
)
from docprompt.models.generation import (
    DecodedEvent,
    DecoderState,
    GenerationRequest,
    StreamSummary,
)

__all__ = [
    "CombinedPrompt",
    "DecodedEvent",
    "DecoderState",
    "ExtractedText",
    "GenerationRequest",
    "PackageMember",
    "SourceFile",
    "StreamSummary",
]
