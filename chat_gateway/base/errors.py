"""Unified adapter error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chat_gateway.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.error_response import ErrorResponse
from .errors_parts.adapter_error import AdapterError
from .errors_parts.classification import (
    RATE_LIMIT_RETRY_AFTER,
    classify_exception,
    error_for_exception,
    error_for_status,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "AdapterError",
    "RATE_LIMIT_RETRY_AFTER",
    "classify_exception",
    "error_for_exception",
    "error_for_status",
]
