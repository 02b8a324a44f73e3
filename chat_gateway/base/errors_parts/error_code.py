"""
Normalized adapter error codes (taxonomy).

Defines the closed `ErrorCode` enumeration shared by every provider adapter.
Values mirror the member names and are considered a stable public contract
for callers, logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    INVALID_API_KEY = "INVALID_API_KEY"
    RATE_LIMITED = "RATE_LIMITED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"
    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


__all__ = ["ErrorCode"]
