"""Incremental Server-Sent-Events decoding for provider streams.

Purpose:
- Turn a sequence of arbitrarily split byte chunks into the ordered list of
  text deltas carried by ``data:`` event lines.
- Keep the algorithm identical for every provider; adapters only supply the
  data prefix they expect and a function extracting the delta from one parsed
  JSON envelope.

Algorithm:
- A single text buffer accumulates decoded chunks. Decoding is incremental, so
  a multi-byte UTF-8 sequence split across chunks is carried over intact.
- The buffer is split on ``\\n``; complete lines are processed, the trailing
  fragment stays buffered for the next chunk.
- Each line is stripped; empty lines, lines without the data prefix and the
  ``[DONE]`` sentinel are skipped. The remainder is parsed as JSON and handed
  to the extractor. Non-empty results are emitted immediately.
- At end-of-stream the decoder is flushed and the leftover fragment is
  processed as a final line.

Failure modes:
- A malformed line (invalid JSON or an unexpected envelope shape) is skipped
  and reported through the optional ``on_error`` callback. It never aborts
  the stream.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, AsyncIterable, AsyncIterator, Callable, Iterable, List, Optional

# OpenAI-family and Gemini streams put a space after the colon; DashScope does not.
DATA_PREFIX = "data: "
DATA_PREFIX_COMPACT = "data:"
DONE_SENTINEL = "[DONE]"

DeltaExtractor = Callable[[Any], Optional[str]]
ErrorCallback = Callable[[str, Exception], None]

# Exceptions that mark a single line as malformed rather than the stream as broken.
MALFORMED_LINE_ERRORS = (ValueError, KeyError, IndexError, TypeError, AttributeError)


class SSELineDecoder:
    """Reassemble complete text lines from boundary-unaligned byte chunks."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> List[str]:
        """Append ``chunk`` and return every line completed by it."""
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return lines

    def flush(self) -> List[str]:
        """Return the buffered trailing fragment (if any) and reset the decoder."""
        self._buffer += self._decoder.decode(b"", final=True)
        tail, self._buffer = self._buffer, ""
        return [tail] if tail else []


def decode_event_line(line: str, prefix: str = DATA_PREFIX) -> Optional[Any]:
    """Return the parsed JSON payload of one SSE line.

    Returns ``None`` for lines that carry no payload (blank, comment/field
    lines without ``prefix``, the ``[DONE]`` sentinel).

    Raises:
        ValueError: if the payload is not valid JSON.
    """
    trimmed = line.strip()
    if not trimmed or not trimmed.startswith(prefix):
        return None
    data = trimmed[len(prefix):].strip()
    if not data or data == DONE_SENTINEL:
        return None
    return json.loads(data)


class SSEDeltaParser:
    """Stateful parser turning byte chunks into extracted text deltas.

    Parameters:
        extract: Function returning the delta text from one parsed envelope.
        prefix: Data-line prefix expected by the provider.
        on_error: Optional callback invoked with ``(line, exc)`` for each
            malformed line that gets skipped.
    """

    def __init__(
        self,
        extract: DeltaExtractor,
        prefix: str = DATA_PREFIX,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._lines = SSELineDecoder()
        self._extract = extract
        self._prefix = prefix
        self._on_error = on_error

    def _deltas(self, lines: Iterable[str]) -> List[str]:
        out: List[str] = []
        for line in lines:
            try:
                payload = decode_event_line(line, self._prefix)
                if payload is None:
                    continue
                delta = self._extract(payload)
            except MALFORMED_LINE_ERRORS as exc:
                if self._on_error is not None:
                    self._on_error(line, exc)
                continue
            if isinstance(delta, str) and delta:
                out.append(delta)
        return out

    def feed(self, chunk: bytes) -> List[str]:
        """Consume one chunk and return the deltas it completed, in order."""
        return self._deltas(self._lines.feed(chunk))

    def finish(self) -> List[str]:
        """Flush the decoder and return deltas from the final fragment."""
        return self._deltas(self._lines.flush())


def decode_sse_deltas(
    chunks: Iterable[bytes],
    extract: DeltaExtractor,
    prefix: str = DATA_PREFIX,
    on_error: Optional[ErrorCallback] = None,
) -> List[str]:
    """Decode an in-memory sequence of chunks into the full list of deltas."""
    parser = SSEDeltaParser(extract, prefix, on_error)
    out: List[str] = []
    for chunk in chunks:
        out.extend(parser.feed(chunk))
    out.extend(parser.finish())
    return out


async def iter_sse_deltas(
    chunks: AsyncIterable[bytes],
    extract: DeltaExtractor,
    prefix: str = DATA_PREFIX,
    on_error: Optional[ErrorCallback] = None,
) -> AsyncIterator[str]:
    """Yield deltas as soon as the chunk completing their line arrives."""
    parser = SSEDeltaParser(extract, prefix, on_error)
    async for chunk in chunks:
        for delta in parser.feed(chunk):
            yield delta
    for delta in parser.finish():
        yield delta


__all__ = [
    "DATA_PREFIX",
    "DATA_PREFIX_COMPACT",
    "DONE_SENTINEL",
    "SSELineDecoder",
    "SSEDeltaParser",
    "decode_event_line",
    "decode_sse_deltas",
    "iter_sse_deltas",
]
