"""OpenAI adapter.

Uses the shared OpenAI-compatible wire format. Discovery keeps chat models
only: ids containing ``gpt`` that are not ``instruct`` variants.
"""

from __future__ import annotations

from typing import List

from ..base.constants import Provider
from ..base.openai_style import OpenAIStyleAdapter


class OpenAIAdapter(OpenAIStyleAdapter):
    """Adapter for ``api.openai.com`` (or a compatible proxy endpoint)."""

    provider = Provider.OPENAI

    def _filter_models(self, model_ids: List[str]) -> List[str]:
        return [m for m in model_ids if "gpt" in m and "instruct" not in m]


__all__ = ["OpenAIAdapter"]
