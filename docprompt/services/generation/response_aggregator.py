"""Turns generate-endpoint responses into output text.

Two modes, chosen by the caller:

- **Buffered** -- the body is exactly one JSON object; its ``response``
  field, trimmed, is the answer.
- **Streaming** -- the body is NDJSON.  Each token is written to the sink
  the moment its event is decoded (no buffering, no reordering).  The
  terminal event writes one trailing newline and stops consumption; a
  stream that ends without one still gets the newline so the terminal is
  left clean.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterable, Callable

import structlog

from docprompt.models.generation import DecoderState, StreamSummary
from docprompt.services.generation.event_decoder import StreamingEventDecoder, decode_stream
from docprompt.utils.errors import GenerationError

logger = structlog.get_logger(logger_name=__name__)

TextSink = Callable[[str], object]


class ResponseAggregator:
    """Collects the model's answer from a buffered body or a byte stream."""

    def __init__(self, provider_name: str = "ollama") -> None:
        self._provider_name = provider_name

    def aggregate_buffered(self, body: bytes | str) -> str:
        """Return the trimmed ``response`` field of a single JSON object.

        Raises
        ------
        GenerationError
            If the body is not a JSON object, or it carries an ``error`` and
            no ``response``.
        """
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise GenerationError(
                message=f"Response body is not valid JSON: {exc}",
                provider_name=self._provider_name,
            ) from exc
        if not isinstance(data, dict):
            raise GenerationError(
                message="Response body is not a JSON object",
                provider_name=self._provider_name,
            )

        response = data.get("response")
        if response is None and data.get("error"):
            raise GenerationError(message=str(data["error"]), provider_name=self._provider_name)

        answer = (response if isinstance(response, str) else "").strip()
        logger.info("buffered_response_received", chars=len(answer))
        return answer

    async def aggregate_stream(
        self,
        chunks: AsyncIterable[bytes],
        sink: TextSink,
    ) -> StreamSummary:
        """Write tokens to ``sink`` as they arrive; stop at the terminal event.

        Parameters
        ----------
        chunks:
            Raw response body chunks, in arrival order.
        sink:
            Called with each non-empty token, then once with ``"\\n"``.

        Returns
        -------
        StreamSummary
            Full text written (without the trailing newline), the number of
            decoded events, and the decoder's final state.
        """
        decoder = StreamingEventDecoder()
        pieces: list[str] = []
        event_count = 0
        events = decode_stream(chunks, decoder)
        try:
            async for event in events:
                event_count += 1
                if event.error:
                    logger.warning("stream_error_event", error=event.error)
                if event.token_text:
                    sink(event.token_text)
                    pieces.append(event.token_text)
                if event.is_final:
                    break
        finally:
            await events.aclose()
            # Release the transport when stopping before the body is exhausted.
            close = getattr(chunks, "aclose", None)
            if close is not None:
                await close()

        sink("\n")
        if decoder.state is not DecoderState.DONE:
            logger.warning(
                "stream_ended_incomplete",
                events=event_count,
                dropped_lines=decoder.dropped_lines,
            )
        else:
            logger.info("stream_completed", events=event_count, chars=sum(map(len, pieces)))

        return StreamSummary(text="".join(pieces), event_count=event_count, state=decoder.state)
