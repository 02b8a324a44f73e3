"""
Message DTO used across adapters.

Defines the `ChatMessage` dataclass and the `Role` literal representing the
sender role. Ordered sequences of messages form a conversation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal


# Message roles understood by every adapter.
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single chat turn.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Return the OpenAI-style ``{"role", "content"}`` mapping."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "ChatMessage",
    "Role",
]
