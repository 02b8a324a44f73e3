"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to their provider wire format. The
request is immutable for the duration of a call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from .message import ChatMessage


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered sequence of `ChatMessage` instances (stored as a tuple).
        temperature: Sampling temperature when supported by the provider.
        max_tokens: Maximum tokens for the completion (adapter maps the param name).
    """

    model: str
    messages: Sequence[ChatMessage] = field(default_factory=tuple)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        # Freeze the caller's list so later mutation cannot leak into a call.
        object.__setattr__(self, "messages", tuple(self.messages))

    @property
    def system_message(self) -> Optional[ChatMessage]:
        """Return the last ``system`` message, if any."""
        found: Optional[ChatMessage] = None
        for m in self.messages:
            if m.role == "system":
                found = m
        return found

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        messages: Tuple[ChatMessage, ...] = tuple(self.messages)
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


__all__ = [
    "ChatRequest",
]
