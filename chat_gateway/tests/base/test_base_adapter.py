from __future__ import annotations

import asyncio

import httpx
import pytest

from chat_gateway.base.errors import AdapterError, ErrorCode
from chat_gateway.base.http import create_async_client
from chat_gateway.openai import OpenAIAdapter

from ..helpers import Recorder, json_response, raise_error, text_response


def _adapter(handler, timeout: int = 1000) -> OpenAIAdapter:
    return OpenAIAdapter({"api_key": "sk-live", "timeout": timeout}, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_with_timeout_success():
    rec = Recorder(json_response(200, {"ok": True}))
    adapter = _adapter(rec)
    async with create_async_client(transport=rec.transport) as client:
        response = await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    assert response.status_code == 200
    assert rec.last.headers["User-Agent"].startswith("chat-gateway/")


@pytest.mark.asyncio
async def test_fetch_with_timeout_deadline_elapsed():
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200)

    adapter = _adapter(slow, timeout=20)
    async with create_async_client(transport=httpx.MockTransport(slow)) as client:
        with pytest.raises(AdapterError) as info:
            await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    assert info.value.code is ErrorCode.NETWORK_TIMEOUT
    assert info.value.retryable is True


@pytest.mark.asyncio
async def test_fetch_with_timeout_transport_timeout():
    handler = raise_error(httpx.ConnectTimeout("connect timed out"))
    adapter = _adapter(handler)
    async with create_async_client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AdapterError) as info:
            await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    assert info.value.code is ErrorCode.NETWORK_TIMEOUT


@pytest.mark.asyncio
async def test_fetch_with_timeout_network_failure():
    exc = httpx.ConnectError("connection refused")
    handler = raise_error(exc)
    adapter = _adapter(handler)
    async with create_async_client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AdapterError) as info:
            await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    assert info.value.code is ErrorCode.UNKNOWN_ERROR
    assert info.value.retryable is False
    assert info.value.details is exc
    assert info.value.__cause__ is exc


def test_handle_http_error_raises():
    adapter = _adapter(json_response(200, {}))
    with pytest.raises(AdapterError) as info:
        adapter.handle_http_error(429, {"error": {"message": "slow"}})
    assert info.value.code is ErrorCode.RATE_LIMITED
    assert info.value.retry_after == 60
    assert info.value.details == {"error": {"message": "slow"}}


@pytest.mark.asyncio
async def test_raise_for_response_non_json_body_becomes_empty_dict():
    handler = text_response(500, "<html>oops</html>")
    adapter = _adapter(handler)
    async with create_async_client(transport=httpx.MockTransport(handler)) as client:
        response = await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    with pytest.raises(AdapterError) as info:
        await adapter.raise_for_response(response)
    assert info.value.code is ErrorCode.UNKNOWN_ERROR
    assert info.value.details == {}


@pytest.mark.asyncio
async def test_raise_for_response_success_is_noop():
    handler = json_response(200, {"ok": True})
    adapter = _adapter(handler)
    async with create_async_client(transport=httpx.MockTransport(handler)) as client:
        response = await adapter.fetch_with_timeout(client, "GET", "https://x.test/models")
    assert await adapter.raise_for_response(response) is None


def test_default_models_is_fresh_copy():
    first = OpenAIAdapter.default_models()
    first.append("mutated")
    assert "mutated" not in OpenAIAdapter.default_models()


def test_repr_hides_api_key():
    assert "sk-live" not in repr(_adapter(json_response(200, {})))


@pytest.mark.asyncio
async def test_complete_wraps_envelope_parse_failures():
    payload = {"choices": "unexpected"}
    adapter = _adapter(json_response(200, payload))

    def parse(data):
        raise TypeError("choices must be a list")

    with pytest.raises(AdapterError) as info:
        await adapter._complete("https://x.test/chat/completions", parse=parse, json={})
    assert info.value.code is ErrorCode.UNKNOWN_ERROR
    assert info.value.message == "Invalid provider response"
    assert info.value.details == payload
    assert isinstance(info.value.__cause__, TypeError)


@pytest.mark.asyncio
async def test_mid_stream_transport_error_is_adapter_error():
    class _Broken(httpx.AsyncByteStream):
        async def __aiter__(self):
            yield b'data: {"choices": [{"delta": {"content": "a"}}]}\n'
            raise httpx.ReadError("connection reset")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=_Broken())

    adapter = _adapter(handler)
    async with create_async_client(transport=httpx.MockTransport(handler)) as client:
        response = await adapter.fetch_with_timeout(client, "POST", "https://x.test/chat", stream=True)
        seen = []
        with pytest.raises(AdapterError) as info:
            async for delta in adapter.stream_deltas(response, lambda chunk: chunk["choices"][0]["delta"]["content"]):
                seen.append(delta)
    assert seen == ["a"]
    assert info.value.code is ErrorCode.UNKNOWN_ERROR
    assert isinstance(info.value.details, httpx.ReadError)
