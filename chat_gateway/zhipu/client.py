"""Zhipu (BigModel GLM) adapter.

OpenAI-compatible wire format on ``open.bigmodel.cn``. Zhipu keys have the
form ``<id>.<secret>``, so obviously short keys are rejected before any
request is made. The adapter is constructible directly but is not part of the
factory's supported provider list.
"""

from __future__ import annotations

from typing import List

from ..base.constants import Provider
from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import ZHIPU_MIN_API_KEY_LENGTH, ZHIPU_VALIDATION_MODEL


class ZhipuAdapter(OpenAIStyleAdapter):
    """Adapter for the Zhipu GLM chat endpoint."""

    provider = Provider.ZHIPU

    async def validate_api_key(self, api_key: str) -> bool:
        if not api_key or len(api_key) < ZHIPU_MIN_API_KEY_LENGTH:
            return False
        return await self._validate_with_completion(api_key, ZHIPU_VALIDATION_MODEL)

    async def list_models(self) -> List[str]:
        return self.default_models()


__all__ = ["ZhipuAdapter"]
