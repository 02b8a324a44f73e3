"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chat_gateway.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .error_response import ErrorResponse
from .adapter_error import AdapterError
from .classification import classify_exception, error_for_exception, error_for_status

__all__ = ["ErrorCode", "ErrorResponse", "AdapterError", "classify_exception", "error_for_exception", "error_for_status"]
