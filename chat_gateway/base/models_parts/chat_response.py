"""
ChatResponse DTO representing normalized non-streaming completions.

One instance is produced per non-streaming ``chat`` call. Token usage is
optional because not every provider reports it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting reported by the provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
        }


@dataclass(frozen=True)
class ChatResponse:
    """Provider-agnostic response from a chat invocation.

    Attributes:
        content: Completion text (empty string when the provider sent none).
        finish_reason: Provider-reported termination cause (``"stop"`` by default).
        usage: Optional token usage counts.
    """

    content: str
    finish_reason: str = "stop"
    usage: Optional[TokenUsage] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        out: Dict[str, Any] = {"content": self.content, "finishReason": self.finish_reason}
        if self.usage is not None:
            out["usage"] = self.usage.to_dict()
        return out


__all__ = [
    "TokenUsage",
    "ChatResponse",
]
