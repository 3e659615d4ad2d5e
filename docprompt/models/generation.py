"""Generation request and streaming response models.

The generation endpoint speaks a tiny JSON protocol: the request body is
``{model, prompt, stream}``; a buffered reply is one JSON object with a
``response`` field; a streamed reply is NDJSON, one object per line with an
optional ``response`` token and a ``done`` flag on the terminal object.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """JSON body posted to the generate endpoint."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(min_length=1)
    prompt: str
    stream: bool = False


class DecodedEvent(BaseModel):
    """One NDJSON object decoded from a streamed response.

    ``token_text`` is the object's ``response`` field when it is a string;
    ``is_final`` mirrors a truthy ``done``; ``error`` carries a server-side
    error message when the endpoint reports one mid-stream.
    """

    model_config = ConfigDict(frozen=True)

    token_text: str | None = None
    is_final: bool = False
    error: str | None = None


class DecoderState(str, Enum):
    """Lifecycle of a :class:`StreamingEventDecoder`."""

    ACCUMULATING = "accumulating"
    DONE = "done"
    ENDED_INCOMPLETE = "ended_incomplete"


class StreamSummary(BaseModel):
    """What a streaming aggregation produced once it stopped."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    event_count: int = Field(default=0, ge=0)
    state: DecoderState = DecoderState.ACCUMULATING

    @property
    def completed(self) -> bool:
        return self.state is DecoderState.DONE
