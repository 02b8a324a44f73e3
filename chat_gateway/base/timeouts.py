"""Unified timeout utilities for adapters.

This module centralizes the request deadline used across provider adapters
and exposes a small awaitable guard that bounds the start phase of an
outbound call (dispatch until headers, or until the body for non-streaming
requests).

Key Components
--------------
TimeoutConfig
    Dataclass capturing the normalized deadline. Adapters that receive an
    explicit ``timeout`` in their :class:`AdapterConfig` override it.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use only. Supported environment variables (all optional):
        CHAT_GATEWAY_TIMEOUT_MS

with_deadline(awaitable, timeout_ms)
    Awaits ``awaitable`` bounded by ``timeout_ms``; on expiry the in-flight
    task is cancelled and ``TimeoutError`` is raised. The deadline is
    released as soon as the awaitable completes, success or failure.

Design Constraints
------------------
1. No ad-hoc timeouts outside this module and ``config.defaults``.
2. Avoid per-call env parsing (cache after first read).
3. Timeouts bound dispatch only; an open stream is never cut by them.
"""
from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

from ..config.defaults import DEFAULT_TIMEOUT_MS

T = TypeVar("T")

TIMEOUT_ENV = "CHAT_GATEWAY_TIMEOUT_MS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values.

    Attributes:
        request_timeout_ms: Deadline for dispatching a request and receiving
            its headers (plus body for non-streaming calls).
    """

    request_timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_int(name: str, default: int) -> int:
    """Parse a positive integer environment variable with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance.

    The cache is refreshed when ``CHAT_GATEWAY_TIMEOUT_MS`` changes so tests
    can adjust it at runtime.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = os.getenv(TIMEOUT_ENV, "")
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED
    _CACHED = TimeoutConfig(request_timeout_ms=_parse_env_int(TIMEOUT_ENV, DEFAULT_TIMEOUT_MS))
    _ENV_GUARD = cur_guard
    return _CACHED


async def with_deadline(awaitable: Awaitable[T], timeout_ms: int) -> T:
    """Await ``awaitable`` for at most ``timeout_ms`` milliseconds.

    A non-positive ``timeout_ms`` disables the guard.

    Raises:
        TimeoutError: if the deadline elapses first; the pending work is
            cancelled before the error propagates.
    """
    if timeout_ms <= 0:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout_ms / 1000.0)
    except asyncio.TimeoutError as exc:
        raise TimeoutError(f"operation exceeded {timeout_ms}ms") from exc


__all__ = [
    "TIMEOUT_ENV",
    "TimeoutConfig",
    "get_timeout_config",
    "with_deadline",
]
