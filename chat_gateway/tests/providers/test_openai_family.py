from __future__ import annotations

import pytest

from chat_gateway.base.models import ChatMessage, ChatRequest
from chat_gateway.config.defaults import DEFAULT_MODELS
from chat_gateway.deepseek import DeepSeekAdapter
from chat_gateway.doubao import DoubaoAdapter
from chat_gateway.zhipu import ZhipuAdapter

from ..helpers import Recorder, StreamResponder, collect, json_response, sse


@pytest.mark.asyncio
async def test_deepseek_chat_and_models():
    rec = Recorder(json_response(200, {"choices": [{"message": {"content": "ok"}, "finish_reason": "stop"}]}))
    adapter = DeepSeekAdapter({"api_key": "sk-ds"}, transport=rec.transport)
    resp = await adapter.chat(ChatRequest(model="deepseek-chat", messages=[ChatMessage("user", "hi")]))
    assert resp.content == "ok"
    assert str(rec.last.url) == "https://api.deepseek.com/v1/chat/completions"

    rec = Recorder(json_response(200, {"data": [{"id": "deepseek-chat"}, {"id": "deepseek-coder"}]}))
    adapter = DeepSeekAdapter({"api_key": "sk-ds"}, transport=rec.transport)
    assert await adapter.list_models() == ["deepseek-chat", "deepseek-coder"]
    assert await adapter.validate_api_key("sk-ds") is True
    assert rec.last.method == "GET"


@pytest.mark.asyncio
async def test_deepseek_stream():
    rec = Recorder(StreamResponder([sse({"choices": [{"delta": {"content": "深度"}}]})]))
    adapter = DeepSeekAdapter({"api_key": "sk-ds"}, transport=rec.transport)
    assert await collect(adapter.chat_stream(ChatRequest(model="deepseek-chat", messages=[]))) == ["深度"]


@pytest.mark.asyncio
async def test_doubao_validate_sends_one_token_completion():
    rec = Recorder(json_response(200, {"choices": []}))
    adapter = DoubaoAdapter({"api_key": "ark"}, transport=rec.transport)
    assert await adapter.validate_api_key("ark-candidate") is True
    assert rec.last.method == "POST"
    assert str(rec.last.url) == "https://ark.cn-beijing.volces.com/api/v3/chat/completions"
    assert rec.last.headers["Authorization"] == "Bearer ark-candidate"
    assert rec.last_json() == {
        "model": "doubao-lite-32k",
        "messages": [{"role": "user", "content": "hi"}],
        "max_tokens": 1,
    }


@pytest.mark.asyncio
async def test_doubao_list_models_is_static():
    rec = Recorder(json_response(500, {}))
    adapter = DoubaoAdapter({"api_key": "ark"}, transport=rec.transport)
    assert await adapter.list_models() == list(DEFAULT_MODELS["doubao"])
    assert rec.requests == []


@pytest.mark.asyncio
async def test_zhipu_short_key_rejected_without_io():
    rec = Recorder(json_response(200, {}))
    adapter = ZhipuAdapter({"api_key": "k"}, transport=rec.transport)
    assert await adapter.validate_api_key("short") is False
    assert await adapter.validate_api_key("") is False
    assert rec.requests == []


@pytest.mark.asyncio
async def test_zhipu_validate_and_chat():
    rec = Recorder(json_response(200, {"choices": [{"message": {"content": "你好"}}]}))
    adapter = ZhipuAdapter({"api_key": "abcdef.0123456789"}, transport=rec.transport)
    assert await adapter.validate_api_key("abcdef.0123456789") is True
    assert rec.last_json()["model"] == "glm-4-flash"
    resp = await adapter.chat(ChatRequest(model="glm-4-plus", messages=[ChatMessage("user", "hi")]))
    assert resp.content == "你好"
    assert str(rec.last.url) == "https://open.bigmodel.cn/api/paas/v4/chat/completions"
    assert await adapter.list_models() == list(DEFAULT_MODELS["zhipu"])
