"""
Structured error payload carried by :class:`AdapterError`.

The payload is the only representation of a failure that crosses the adapter
boundary. Provider-native error bodies never leak except inside ``details``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass(frozen=True)
class ErrorResponse:
    """Normalized description of an adapter failure.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        details: Opaque diagnostics, typically the raw provider error body or
            the underlying transport exception.
        retryable: Hint that the caller may safely retry the same request.
        retry_after: Optional delay in seconds to wait before retrying.
    """

    code: ErrorCode
    message: str
    details: Any = None
    retryable: bool = False
    retry_after: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly mapping; exceptions in ``details`` become strings."""
        details = self.details
        if isinstance(details, BaseException):
            details = repr(details)
        out: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "retryable": self.retryable,
        }
        if details is not None:
            out["details"] = details
        if self.retry_after is not None:
            out["retryAfter"] = self.retry_after
        return out


__all__ = ["ErrorResponse"]
