"""Doubao (Volcengine Ark) adapter.

Ark speaks the OpenAI-compatible Chat Completions format but exposes no model
listing endpoint:

- ``validate_api_key`` sends a one-token completion to ``doubao-lite-32k``.
- ``list_models`` returns the fixed default list without any I/O.
"""

from __future__ import annotations

from typing import List

from ..base.constants import Provider
from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import DOUBAO_VALIDATION_MODEL


class DoubaoAdapter(OpenAIStyleAdapter):
    """Adapter for the Volcengine Ark chat endpoint."""

    provider = Provider.DOUBAO

    async def validate_api_key(self, api_key: str) -> bool:
        return await self._validate_with_completion(api_key, DOUBAO_VALIDATION_MODEL)

    async def list_models(self) -> List[str]:
        return self.default_models()


__all__ = ["DoubaoAdapter"]
