"""Response decoding for the generate endpoint.

- **event_decoder.py** -- StreamingEventDecoder: NDJSON reassembly across
  chunk boundaries with an explicit ACCUMULATING / DONE /
  ENDED_INCOMPLETE state machine.
- **response_aggregator.py** -- ResponseAggregator: buffered answer
  extraction and token-by-token streaming to an output sink.
"""

from docprompt.services.generation.event_decoder import (
    StreamingEventDecoder,
    decode_stream,
    event_from_object,
)
from docprompt.services.generation.response_aggregator import ResponseAggregator

__all__ = [
    "ResponseAggregator",
    "StreamingEventDecoder",
    "decode_stream",
    "event_from_object",
]
