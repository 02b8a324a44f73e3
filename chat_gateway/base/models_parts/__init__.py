"""Canonical chat DTOs split one class family per module."""

from .message import ChatMessage, Role
from .chat_request import ChatRequest
from .chat_response import ChatResponse, TokenUsage

__all__ = ["ChatMessage", "Role", "ChatRequest", "ChatResponse", "TokenUsage"]
