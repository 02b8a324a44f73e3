"""GeminiAdapter for the Google Generative Language REST API.

Purpose:
- Map the canonical chat request onto Gemini's ``generateContent`` format and
  normalize the ``candidates`` envelope back into :class:`ChatResponse`.

Wire format:
- ``POST {endpoint}/models/{model}:generateContent?key=<api_key>``; streaming
  uses ``:streamGenerateContent?key=<api_key>&alt=sse``.
- ``system`` messages are lifted into ``systemInstruction`` (the last one
  wins) and excluded from ``contents``; ``assistant`` becomes ``model``.
- ``generationConfig`` carries ``temperature`` and ``maxOutputTokens`` when set.
- Content is the concatenation of ``candidates[0].content.parts[*].text``; the
  finish reason keeps the provider casing (default ``"STOP"``).

Security:
- The key travels as a query parameter, so request URLs are never logged.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

from ..base.adapter import BaseAdapter
from ..base.constants import Provider
from ..base.models import ChatRequest, ChatResponse
from ..base.streaming import DATA_PREFIX
from ..base.utils import dig, dig_text, usage_from

GEMINI_DEFAULT_FINISH_REASON = "STOP"
GENERATE_CONTENT_METHOD = "generateContent"
MODEL_NAME_PREFIX = "models/"


def extract_gemini_text(payload: Any) -> Optional[str]:
    """Join the text parts of the first candidate; ``None`` when absent."""
    parts = dig(payload, "candidates", 0, "content", "parts")
    if not isinstance(parts, list):
        return None
    return "".join(dig_text(p, "text") for p in parts)


def parse_gemini_models(data: Any) -> List[str]:
    """Return ids of models supporting ``generateContent``, without ``models/``."""
    out: List[str] = []
    for model in dig(data, "models", default=[]):
        if not isinstance(model, dict):
            continue
        if GENERATE_CONTENT_METHOD not in (model.get("supportedGenerationMethods") or []):
            continue
        name = model.get("name") or ""
        if name:
            out.append(name.replace(MODEL_NAME_PREFIX, "", 1))
    return out


class GeminiAdapter(BaseAdapter):
    """Adapter for Gemini models served by ``generativelanguage.googleapis.com``."""

    provider = Provider.GEMINI

    def _build_body(self, request: ChatRequest) -> Dict[str, Any]:
        contents: List[Dict[str, Any]] = []
        system_instruction: Optional[Dict[str, Any]] = None
        for msg in request.messages:
            if msg.role == "system":
                system_instruction = {"parts": [{"text": msg.content}]}
                continue
            contents.append({
                "role": "model" if msg.role == "assistant" else "user",
                "parts": [{"text": msg.content}],
            })
        generation_config: Dict[str, Any] = {}
        if request.temperature is not None:
            generation_config["temperature"] = request.temperature
        if request.max_tokens is not None:
            generation_config["maxOutputTokens"] = request.max_tokens
        body: Dict[str, Any] = {"contents": contents, "generationConfig": generation_config}
        if system_instruction is not None:
            body["systemInstruction"] = system_instruction
        return body

    def _parse_response(self, data: Any) -> ChatResponse:
        return ChatResponse(
            content=extract_gemini_text(data) or "",
            finish_reason=dig_text(data, "candidates", 0, "finishReason") or GEMINI_DEFAULT_FINISH_REASON,
            usage=usage_from(
                dig(data, "usageMetadata"),
                "promptTokenCount",
                "candidatesTokenCount",
                "totalTokenCount",
            ),
        )

    async def chat(self, request: ChatRequest) -> ChatResponse:
        return await self._complete(
            self._url(f"models/{request.model}:generateContent"),
            parse=self._parse_response,
            ctx=self._ctx(request.model),
            json=self._build_body(request),
            params={"key": self._api_key},
            headers={"Content-Type": "application/json"},
        )

    def chat_stream(self, request: ChatRequest) -> AsyncIterator[str]:
        return self._sse_stream(
            self._url(f"models/{request.model}:streamGenerateContent"),
            extract=extract_gemini_text,
            prefix=DATA_PREFIX,
            ctx=self._ctx(request.model),
            json=self._build_body(request),
            params={"key": self._api_key, "alt": "sse"},
            headers={"Content-Type": "application/json"},
        )

    async def validate_api_key(self, api_key: str) -> bool:
        return await self._check_key("GET", self._url("models"), params={"key": api_key})

    async def list_models(self) -> List[str]:
        return await self._discover_models(
            self._url("models"),
            parse_gemini_models,
            params={"key": self._api_key},
        )


__all__ = [
    "GeminiAdapter",
    "extract_gemini_text",
    "parse_gemini_models",
]
