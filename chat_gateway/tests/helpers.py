"""Fake HTTP plumbing shared by adapter tests.

Builds ``httpx.MockTransport`` handlers that record outgoing requests and
replay canned JSON or chunked SSE bodies.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Callable, Iterable, List

import httpx

Responder = Callable[[httpx.Request], httpx.Response]


class ChunkStream(httpx.AsyncByteStream):
    """Async body yielding the given chunks verbatim and recording closure.

    ``delay`` seconds are slept before every chunk after the first.
    """

    def __init__(self, chunks: Iterable[bytes], delay: float = 0.0) -> None:
        self._chunks = list(chunks)
        self._delay = delay
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for i, chunk in enumerate(self._chunks):
            if i and self._delay:
                await asyncio.sleep(self._delay)
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


class StreamResponder:
    """Responder serving a fresh :class:`ChunkStream` per request."""

    def __init__(self, chunks: Iterable[bytes], status: int = 200, delay: float = 0.0) -> None:
        self._chunks = list(chunks)
        self._status = status
        self._delay = delay
        self.streams: List[ChunkStream] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        stream = ChunkStream(self._chunks, self._delay)
        self.streams.append(stream)
        return httpx.Response(self._status, headers={"Content-Type": "text/event-stream"}, stream=stream)


class Recorder:
    """MockTransport handler recording requests and delegating to a responder."""

    def __init__(self, respond: Responder) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def json_response(status: int, payload: Any) -> Responder:
    return lambda request: httpx.Response(status, json=payload)


def text_response(status: int, text: str) -> Responder:
    return lambda request: httpx.Response(status, text=text)


def raise_error(exc: Exception) -> Responder:
    def _respond(request: httpx.Request) -> httpx.Response:
        raise exc

    return _respond


def sse(*payloads: Any, prefix: str = "data: ", done: bool = True) -> bytes:
    """Encode payloads as SSE ``data`` lines (non-strings are JSON-encoded)."""
    lines = []
    for p in payloads:
        body = p if isinstance(p, str) else json.dumps(p, ensure_ascii=False)
        lines.append(f"{prefix}{body}\n\n")
    if done:
        lines.append(f"{prefix}[DONE]\n\n")
    return "".join(lines).encode("utf-8")


def split_every(data: bytes, size: int) -> List[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


async def collect(stream: AsyncIterator[str]) -> List[str]:
    return [delta async for delta in stream]
