"""Incremental NDJSON decoder for streamed generation responses.

# ─── STATE MACHINE ────────────────────────────────────────────────────
#
#   ACCUMULATING ──(final event decoded)──────────────▶ DONE
#        │
#        └──────(finish() without a final event)─────▶ ENDED_INCOMPLETE
#
# feed(chunk) appends the chunk (decoded as UTF-8) to a pending buffer and
# splits it on "\n".  Every complete line is a candidate event; the last,
# possibly unterminated, fragment stays pending for the next chunk.  So
# the same byte stream yields the same events however the transport cut
# it into chunks.
#
# The UTF-8 decoding is incremental as well: a multi-byte character split
# across two chunks is held back until its last byte arrives.
#
# Lines that are not a JSON object are dropped.  Partial or garbled lines
# are expected noise on a live stream, never a reason to fail.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import codecs
import json
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

import structlog

from docprompt.models.generation import DecodedEvent, DecoderState

logger = structlog.get_logger(logger_name=__name__)


def event_from_object(obj: dict[str, Any]) -> DecodedEvent:
    """Map one decoded JSON object onto a :class:`DecodedEvent`."""
    response = obj.get("response")
    error = obj.get("error")
    return DecodedEvent(
        token_text=response if isinstance(response, str) else None,
        is_final=bool(obj.get("done")),
        error=str(error) if error else None,
    )


class StreamingEventDecoder:
    """Reassembles JSON events from an arbitrarily chunked byte stream.

    One instance per response stream; the pending buffer is not shared.
    """

    def __init__(self) -> None:
        self._pending = ""
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._state = DecoderState.ACCUMULATING
        self._dropped = 0

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def dropped_lines(self) -> int:
        """Number of non-empty lines discarded as malformed."""
        return self._dropped

    @property
    def pending(self) -> str:
        """The unterminated tail carried over to the next chunk."""
        return self._pending

    def feed(self, chunk: bytes) -> list[DecodedEvent]:
        """Consume one chunk and return the events it completed, in order.

        Once the decoder is ``DONE`` every further chunk is ignored.
        """
        if self._state is not DecoderState.ACCUMULATING:
            return []

        self._pending += self._utf8.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        return self._decode_lines(lines)

    def finish(self) -> list[DecodedEvent]:
        """Drain whatever is left once the stream has ended.

        The remaining fragment is treated as a last candidate line (servers
        do not always terminate the final object with a newline).  If no
        final event was ever seen the decoder ends in ``ENDED_INCOMPLETE``.
        Calling it again is a no-op.
        """
        if self._state is not DecoderState.ACCUMULATING:
            return []

        tail = self._pending + self._utf8.decode(b"", final=True)
        self._pending = ""
        events = self._decode_lines(tail.split("\n"))
        if self._state is DecoderState.ACCUMULATING:
            self._state = DecoderState.ENDED_INCOMPLETE
            logger.debug("stream_ended_without_final_event", dropped=self._dropped)
        return events

    def _decode_lines(self, lines: list[str]) -> list[DecodedEvent]:
        events: list[DecodedEvent] = []
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            event = self._decode_line(line)
            if event is None:
                continue
            events.append(event)
            if event.is_final:
                # Anything after the terminal event is ignored.
                self._state = DecoderState.DONE
                self._pending = ""
                break
        return events

    def _decode_line(self, line: str) -> DecodedEvent | None:
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            self._dropped += 1
            logger.debug("stream_line_dropped", reason="invalid_json", preview=line[:80])
            return None
        if not isinstance(obj, dict):
            self._dropped += 1
            logger.debug("stream_line_dropped", reason="not_an_object", preview=line[:80])
            return None
        return event_from_object(obj)


async def decode_stream(
    chunks: AsyncIterable[bytes],
    decoder: StreamingEventDecoder | None = None,
) -> AsyncIterator[DecodedEvent]:
    """Yield events from an async byte stream until the terminal event.

    Stops pulling chunks as soon as the decoder reaches ``DONE``; on natural
    end of the stream the decoder is drained with :meth:`finish`.
    """
    decoder = decoder or StreamingEventDecoder()
    async for chunk in chunks:
        for event in decoder.feed(chunk):
            yield event
        if decoder.state is DecoderState.DONE:
            return
    for event in decoder.finish():
        yield event
