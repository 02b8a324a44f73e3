"""
Error classification helpers mapping HTTP statuses and exceptions to
normalized :class:`ErrorCode` values.

The status table is deterministic and shared by all adapters; exceptions
raised by the transport are reduced to a code with ``classify_exception``
and wrapped with ``error_for_exception``.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Tuple

import httpx

from .adapter_error import AdapterError
from .error_code import ErrorCode
from .error_response import ErrorResponse

# Seconds a caller should wait after a 429 before retrying.
RATE_LIMIT_RETRY_AFTER = 60

# status -> (code, message, retryable, retry_after)
_HTTP_STATUS_MAP: Dict[int, Tuple[ErrorCode, str, bool, Optional[int]]] = {
    401: (ErrorCode.INVALID_API_KEY, "Invalid API key", False, None),
    429: (ErrorCode.RATE_LIMITED, "Rate limit exceeded", True, RATE_LIMIT_RETRY_AFTER),
    402: (ErrorCode.QUOTA_EXCEEDED, "Quota exceeded or permission denied", False, None),
    403: (ErrorCode.QUOTA_EXCEEDED, "Quota exceeded or permission denied", False, None),
    404: (ErrorCode.MODEL_UNAVAILABLE, "Model not found or unavailable", False, None),
    408: (ErrorCode.NETWORK_TIMEOUT, "Request timeout", True, None),
    504: (ErrorCode.NETWORK_TIMEOUT, "Request timeout", True, None),
}


def error_for_status(status: int, body: Any = None) -> AdapterError:
    """Return the :class:`AdapterError` for a non-success HTTP ``status``.

    Unlisted statuses map to ``UNKNOWN_ERROR`` (not retryable). The raw
    response ``body`` is preserved as ``details``.
    """
    mapped = _HTTP_STATUS_MAP.get(status)
    if mapped is None:
        return AdapterError(ErrorResponse(ErrorCode.UNKNOWN_ERROR, f"HTTP error {status}", body))
    code, message, retryable, retry_after = mapped
    return AdapterError(ErrorResponse(code, message, body, retryable, retry_after))


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. AdapterError passthrough.
        2. Timeout exceptions (asyncio / httpx).
        3. ``UNKNOWN_ERROR`` fallback.
    """
    if isinstance(exc, AdapterError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.NETWORK_TIMEOUT
    return ErrorCode.UNKNOWN_ERROR


def error_for_exception(exc: BaseException) -> AdapterError:
    """Wrap a transport or deadline failure into an :class:`AdapterError`.

    Timeouts become a retryable ``NETWORK_TIMEOUT``; anything else becomes
    ``UNKNOWN_ERROR`` carrying the original exception as ``details``.
    """
    if isinstance(exc, AdapterError):
        return exc
    code = classify_exception(exc)
    if code is ErrorCode.NETWORK_TIMEOUT:
        return AdapterError.create(code, "Request timeout", retryable=True)
    return AdapterError.create(code, str(exc) or type(exc).__name__, details=exc)


__all__ = [
    "RATE_LIMIT_RETRY_AFTER",
    "error_for_status",
    "classify_exception",
    "error_for_exception",
    "_HTTP_STATUS_MAP",
]
