from __future__ import annotations

import json

import pytest

from chat_gateway.base.streaming import (
    DATA_PREFIX_COMPACT,
    SSELineDecoder,
    decode_event_line,
    decode_sse_deltas,
    iter_sse_deltas,
)
from chat_gateway.base.openai_style import extract_openai_delta

from ..helpers import split_every, sse


def _chunk(text: str) -> dict:
    return {"choices": [{"delta": {"content": text}}]}


BODY = sse(_chunk("Hel"), _chunk("lo, "), _chunk("wörld 你好"), {"choices": [{"delta": {}}]}, _chunk("!"))
EXPECTED = ["Hel", "lo, ", "wörld 你好", "!"]


def test_whole_body_decodes():
    assert decode_sse_deltas([BODY], extract_openai_delta) == EXPECTED


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 16, 64])
def test_chunk_boundaries_do_not_change_output(size):
    assert decode_sse_deltas(split_every(BODY, size), extract_openai_delta) == EXPECTED


def test_every_single_split_point():
    for cut in range(1, len(BODY)):
        assert decode_sse_deltas([BODY[:cut], BODY[cut:]], extract_openai_delta) == EXPECTED


def test_multibyte_character_split_across_chunks():
    raw = "你".encode("utf-8")
    decoder = SSELineDecoder()
    assert decoder.feed(b"data: " + raw[:1]) == []
    assert decoder.feed(raw[1:] + b"\n") == ["data: 你"]


def test_malformed_lines_are_skipped_and_reported():
    errors = []
    body = b"".join(
        [
            sse(_chunk("a"), done=False),
            b"data: {not json}\n\n",
            b"data: {\"choices\": \"oops\"}\n\n",
            sse(_chunk("b")),
        ]
    )
    out = decode_sse_deltas([body], extract_openai_delta, on_error=lambda line, exc: errors.append(line))
    assert out == ["a", "b"]
    assert errors == ["data: {not json}"]


def test_done_comments_and_foreign_fields_are_ignored():
    body = b": keep-alive\nevent: message\nid: 7\n\n" + sse(_chunk("x"))
    assert decode_sse_deltas([body], extract_openai_delta) == ["x"]


def test_crlf_line_endings():
    body = sse(_chunk("a"), _chunk("b")).replace(b"\n", b"\r\n")
    assert decode_sse_deltas(split_every(body, 4), extract_openai_delta) == ["a", "b"]


def test_unterminated_final_line_is_flushed():
    body = b"data: " + json.dumps(_chunk("tail")).encode()
    assert decode_sse_deltas(split_every(body, 3), extract_openai_delta) == ["tail"]


def test_compact_prefix():
    payload = {"output": {"text": "hi"}}
    body = f"data:{json.dumps(payload)}\n\ndata: {json.dumps(payload)}\n".encode()
    out = decode_sse_deltas([body], lambda p: p["output"]["text"], prefix=DATA_PREFIX_COMPACT)
    assert out == ["hi", "hi"]


def test_space_prefix_rejects_compact_lines():
    body = b'data:{"choices":[{"delta":{"content":"x"}}]}\n'
    assert decode_sse_deltas([body], extract_openai_delta) == []


def test_decode_event_line():
    assert decode_event_line("   ") is None
    assert decode_event_line("data: [DONE]") is None
    assert decode_event_line("data: {\"a\": 1}") == {"a": 1}
    with pytest.raises(ValueError):
        decode_event_line("data: {")


@pytest.mark.asyncio
async def test_iter_sse_deltas_yields_incrementally():
    async def chunks():
        for part in split_every(BODY, 9):
            yield part

    out = [d async for d in iter_sse_deltas(chunks(), extract_openai_delta)]
    assert out == EXPECTED
