"""Qwen adapter for Alibaba Cloud DashScope.

DashScope uses its own text-generation envelope rather than the OpenAI one:

- ``POST {endpoint}/services/aigc/text-generation/generation`` with
  ``{model, input: {messages}, parameters: {temperature, max_tokens,
  result_format: "message"}}``.
- Responses come in two shapes: ``output.choices[0].message`` (message
  result format) or the legacy ``output.text`` / ``output.finish_reason``.
  Both are accepted.
- Streaming sets ``X-DashScope-SSE: enable`` and ``incremental_output`` so
  each event carries only the new text; event lines use the compact
  ``data:`` prefix.
- There is no model listing endpoint; ``list_models`` returns the defaults.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List

from ..base.adapter import BaseAdapter
from ..base.constants import VALIDATION_MAX_TOKENS, VALIDATION_PROMPT, Provider
from ..base.models import ChatRequest, ChatResponse
from ..base.streaming import DATA_PREFIX_COMPACT
from ..base.utils import dig, dig_text, usage_from
from ..config.defaults import QWEN_VALIDATION_MODEL

GENERATION_PATH = "services/aigc/text-generation/generation"


def extract_qwen_text(payload: Any) -> str:
    """Return the text of one DashScope output in either response shape."""
    return (
        dig_text(payload, "output", "choices", 0, "message", "content")
        or dig_text(payload, "output", "text")
    )


class QwenAdapter(BaseAdapter):
    """Adapter for Qwen models served through DashScope."""

    provider = Provider.QWEN

    def _build_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        parameters: Dict[str, Any] = {"result_format": "message"}
        if request.temperature is not None:
            parameters["temperature"] = request.temperature
        if request.max_tokens is not None:
            parameters["max_tokens"] = request.max_tokens
        if stream:
            parameters["incremental_output"] = True
        return {
            "model": request.model,
            "input": {"messages": [m.to_dict() for m in request.messages]},
            "parameters": parameters,
        }

    def _parse_response(self, data: Any) -> ChatResponse:
        finish_reason = (
            dig_text(data, "output", "choices", 0, "finish_reason")
            or dig_text(data, "output", "finish_reason")
            or "stop"
        )
        return ChatResponse(
            content=extract_qwen_text(data),
            finish_reason=finish_reason,
            usage=usage_from(dig(data, "usage"), "input_tokens", "output_tokens", "total_tokens"),
        )

    async def chat(self, request: ChatRequest) -> ChatResponse:
        return await self._complete(
            self._url(GENERATION_PATH),
            parse=self._parse_response,
            ctx=self._ctx(request.model),
            json=self._build_body(request, stream=False),
            headers=self._headers(),
        )

    def chat_stream(self, request: ChatRequest) -> AsyncIterator[str]:
        return self._sse_stream(
            self._url(GENERATION_PATH),
            extract=extract_qwen_text,
            prefix=DATA_PREFIX_COMPACT,
            ctx=self._ctx(request.model),
            json=self._build_body(request, stream=True),
            headers=self._headers(**{"X-DashScope-SSE": "enable"}),
        )

    async def validate_api_key(self, api_key: str) -> bool:
        body = {
            "model": QWEN_VALIDATION_MODEL,
            "input": {"messages": [{"role": "user", "content": VALIDATION_PROMPT}]},
            "parameters": {"max_tokens": VALIDATION_MAX_TOKENS},
        }
        return await self._check_key("POST", self._url(GENERATION_PATH), json=body, headers=self._headers(api_key))

    async def list_models(self) -> List[str]:
        return self.default_models()


__all__ = ["QwenAdapter", "extract_qwen_text"]
