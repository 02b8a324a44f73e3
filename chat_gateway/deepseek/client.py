"""DeepSeek adapter using the OpenAI-compatible Chat Completions API.

All chat, streaming, validation (``GET /models``) and discovery behavior is
inherited from :class:`OpenAIStyleAdapter`; every discovered id is kept.
"""

from __future__ import annotations

from ..base.constants import Provider
from ..base.openai_style import OpenAIStyleAdapter


class DeepSeekAdapter(OpenAIStyleAdapter):
    """DeepSeek adapter built on the OpenAI-style base class."""

    provider = Provider.DEEPSEEK


__all__ = ["DeepSeekAdapter"]
