"""Streaming primitives for the adapter layer.

Keeps SSE decoding separate from request/response DTOs so every adapter
shares one line-reassembly algorithm.
"""

from .sse import (
    DATA_PREFIX,
    DATA_PREFIX_COMPACT,
    DONE_SENTINEL,
    SSEDeltaParser,
    SSELineDecoder,
    decode_event_line,
    decode_sse_deltas,
    iter_sse_deltas,
)

__all__ = [
    "DATA_PREFIX",
    "DATA_PREFIX_COMPACT",
    "DONE_SENTINEL",
    "SSEDeltaParser",
    "SSELineDecoder",
    "decode_event_line",
    "decode_sse_deltas",
    "iter_sse_deltas",
]
