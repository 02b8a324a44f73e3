"""
Typed exception raised by every provider adapter.

Wraps an :class:`ErrorResponse` so callers can branch on ``code`` and decide
whether to retry based on ``retryable`` / ``retry_after``.
"""
from __future__ import annotations

from typing import Any, Optional

from .error_code import ErrorCode
from .error_response import ErrorResponse


class AdapterError(Exception):
    """Represents a structured adapter failure with a normalized error code."""

    def __init__(self, error_response: ErrorResponse) -> None:
        super().__init__(error_response.message)
        self.error_response = error_response

    @classmethod
    def create(
        cls,
        code: ErrorCode,
        message: str,
        details: Any = None,
        retryable: bool = False,
        retry_after: Optional[int] = None,
    ) -> "AdapterError":
        """Build an error from individual fields."""
        return cls(ErrorResponse(code, message, details, retryable, retry_after))

    @property
    def code(self) -> ErrorCode:
        return self.error_response.code

    @property
    def message(self) -> str:
        return self.error_response.message

    @property
    def details(self) -> Any:
        return self.error_response.details

    @property
    def retryable(self) -> bool:
        return self.error_response.retryable

    @property
    def retry_after(self) -> Optional[int]:
        return self.error_response.retry_after

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


__all__ = ["AdapterError"]
