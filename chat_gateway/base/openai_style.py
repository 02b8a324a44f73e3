"""OpenAIStyleAdapter: shared base for OpenAI-compatible Chat Completions APIs.

Purpose:
- Implement ``chat``, ``chat_stream`` and the ``GET /models`` based key
  validation and discovery once for every provider speaking the OpenAI wire
  format (OpenAI, DeepSeek, Doubao, Zhipu).

Wire format:
- ``POST {endpoint}/chat/completions`` with ``Authorization: Bearer <key>``
  and body ``{model, messages, stream, temperature, max_tokens}``; unset
  optional fields are omitted.
- Non-streaming: ``choices[0].message.content`` and
  ``choices[0].finish_reason``; usage from ``prompt_tokens`` /
  ``completion_tokens`` / ``total_tokens``.
- Streaming: ``data: `` prefixed SSE lines, delta at
  ``choices[0].delta.content``.

Subclasses override ``validate_api_key`` / ``list_models`` where the provider
lacks a models endpoint, and ``_filter_models`` to narrow discovery results.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

from .adapter import BaseAdapter
from .constants import VALIDATION_MAX_TOKENS, VALIDATION_PROMPT
from .models import ChatRequest, ChatResponse
from .streaming import DATA_PREFIX
from .utils import dig, dig_text, usage_from

CHAT_COMPLETIONS_PATH = "chat/completions"
MODELS_PATH = "models"


def extract_openai_delta(chunk: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` from one stream chunk."""
    return dig(chunk, "choices", 0, "delta", "content")


def parse_openai_models(data: Any) -> List[str]:
    """Return the ids listed under ``data`` in a ``GET /models`` payload."""
    return [m["id"] for m in dig(data, "data", default=[]) if isinstance(m, dict) and m.get("id")]


class OpenAIStyleAdapter(BaseAdapter):
    """Adapter base for OpenAI-compatible providers."""

    def _build_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model,
            "messages": [m.to_dict() for m in request.messages],
            "stream": stream,
        }
        if request.temperature is not None:
            body["temperature"] = request.temperature
        if request.max_tokens is not None:
            body["max_tokens"] = request.max_tokens
        return body

    def _parse_response(self, data: Any) -> ChatResponse:
        return ChatResponse(
            content=dig_text(data, "choices", 0, "message", "content"),
            finish_reason=dig_text(data, "choices", 0, "finish_reason") or "stop",
            usage=usage_from(dig(data, "usage"), "prompt_tokens", "completion_tokens", "total_tokens"),
        )

    async def chat(self, request: ChatRequest) -> ChatResponse:
        return await self._complete(
            self._url(CHAT_COMPLETIONS_PATH),
            parse=self._parse_response,
            ctx=self._ctx(request.model),
            json=self._build_body(request, stream=False),
            headers=self._headers(),
        )

    def chat_stream(self, request: ChatRequest) -> AsyncIterator[str]:
        return self._sse_stream(
            self._url(CHAT_COMPLETIONS_PATH),
            extract=extract_openai_delta,
            prefix=DATA_PREFIX,
            ctx=self._ctx(request.model),
            json=self._build_body(request, stream=True),
            headers=self._headers(),
        )

    async def validate_api_key(self, api_key: str) -> bool:
        return await self._check_key("GET", self._url(MODELS_PATH), headers=self._headers(api_key))

    async def _validate_with_completion(self, api_key: str, model: str) -> bool:
        """Validate ``api_key`` by requesting a one-token completion from ``model``."""
        body = {
            "model": model,
            "messages": [{"role": "user", "content": VALIDATION_PROMPT}],
            "max_tokens": VALIDATION_MAX_TOKENS,
        }
        return await self._check_key("POST", self._url(CHAT_COMPLETIONS_PATH), json=body, headers=self._headers(api_key))

    def _filter_models(self, model_ids: List[str]) -> List[str]:
        """Hook narrowing discovered ids; the default keeps all of them."""
        return model_ids

    async def list_models(self) -> List[str]:
        return await self._discover_models(
            self._url(MODELS_PATH),
            lambda data: self._filter_models(parse_openai_models(data)),
            headers=self._headers(),
        )


__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "MODELS_PATH",
    "OpenAIStyleAdapter",
    "extract_openai_delta",
    "parse_openai_models",
]
