"""Canonical chat models public surface.

Re-exports the DTOs under ``chat_gateway.base.models_parts`` to keep a single
stable import path for adapters and callers.
"""

from .models_parts.message import ChatMessage, Role
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse, TokenUsage

__all__ = [
    "ChatMessage",
    "Role",
    "ChatRequest",
    "ChatResponse",
    "TokenUsage",
]
