"""Base shared constants for provider adapters.

Central location for provider identities so adapters, the factory and the
configuration layer agree on the same spelling.

Security
--------
This module holds identifiers only. No credentials are embedded.
"""
from __future__ import annotations

from enum import Enum


class Provider(str, Enum):
    """Canonical provider identifiers.

    The value is the lowercase id used by the factory, the configuration layer
    and log events.
    """

    OPENAI = "openai"
    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    QWEN = "qwen"
    DOUBAO = "doubao"
    ZHIPU = "zhipu"


# Minimal completion budget used by request-based key validation.
VALIDATION_MAX_TOKENS = 1

# Placeholder prompt sent by request-based key validation.
VALIDATION_PROMPT = "hi"

__all__ = [
    "Provider",
    "VALIDATION_MAX_TOKENS",
    "VALIDATION_PROMPT",
]
