"""Sliding-window request limiter keyed by caller-chosen strings.

Purpose:
- Cap the number of requests per key (user id, API config id) admitted within
  a trailing window, and report remaining budget and wait time.

Algorithm:
- Each key owns a deque of admission timestamps in milliseconds, oldest first.
- Before every decision, timestamps ``ts <= now - window_size_ms`` are pruned.
  A key whose deque becomes empty is evicted, so idle keys cost no memory.
- ``check_limit`` admits and records ``now`` only while the count is below
  ``max_requests_per_minute``; rejections are not recorded.

Concurrency:
- Prune and append happen under one ``threading.Lock``; the limiter may be
  shared by asyncio tasks and threads alike.

The clock is injectable (``clock() -> ms``) so tests can advance time.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Deque, Dict, Optional

from ...config import get_rate_limiter_config
from ...config.defaults import DEFAULT_MAX_REQUESTS_PER_MINUTE, DEFAULT_WINDOW_SIZE_MS
from ..logging import get_logger, log_event

Clock = Callable[[], float]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class RateLimiterConfig:
    max_requests_per_minute: int = DEFAULT_MAX_REQUESTS_PER_MINUTE
    window_size_ms: int = DEFAULT_WINDOW_SIZE_MS


class RateLimiter:
    """Per-key sliding-window admission control.

    Parameters:
        config: Initial limits; defaults to 60 requests per 60000 ms.
        clock: Zero-argument callable returning the current time in ms.
    """

    def __init__(self, config: Optional[RateLimiterConfig] = None, *, clock: Optional[Clock] = None) -> None:
        self._config = replace(config) if config is not None else RateLimiterConfig()
        self._clock = clock or _monotonic_ms
        self._records: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("chat_gateway.ratelimit")

    def _prune(self, key: str, now: float) -> Optional[Deque[float]]:
        """Drop expired timestamps for ``key``; evict and return ``None`` if empty."""
        record = self._records.get(key)
        if record is None:
            return None
        cutoff = now - self._config.window_size_ms
        while record and record[0] <= cutoff:
            record.popleft()
        if not record:
            del self._records[key]
            return None
        return record

    def check_limit(self, key: str) -> bool:
        """Admit and record one request for ``key`` if budget remains."""
        with self._lock:
            now = self._clock()
            record = self._prune(key, now)
            limit = self._config.max_requests_per_minute
            if (len(record) if record is not None else 0) >= limit:
                admitted = False
            else:
                if record is None:
                    record = self._records[key] = deque()
                record.append(now)
                admitted = True
        if not admitted:
            log_event(self._logger, "ratelimit.rejected", level=logging.DEBUG, key=key, limit=limit)
        return admitted

    def get_remaining_requests(self, key: str) -> int:
        with self._lock:
            record = self._prune(key, self._clock())
            count = len(record) if record is not None else 0
            return max(0, self._config.max_requests_per_minute - count)

    def get_wait_time_ms(self, key: str) -> int:
        """Return ms until ``key`` may be admitted again; ``0`` when it may now."""
        with self._lock:
            now = self._clock()
            record = self._prune(key, now)
            if record is None or len(record) < self._config.max_requests_per_minute:
                return 0
            return max(0, math.ceil(record[0] + self._config.window_size_ms - now))

    def reset_limit(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def clear_all(self) -> None:
        with self._lock:
            self._records.clear()

    def get_config(self) -> RateLimiterConfig:
        """Return a copy of the current limits."""
        with self._lock:
            return replace(self._config)

    def update_config(self, **changes: Any) -> None:
        """Update selected limits (``max_requests_per_minute``, ``window_size_ms``).

        Raises:
            TypeError: for unknown field names.
        """
        allowed = {f.name for f in fields(RateLimiterConfig)}
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(f"unknown rate limiter setting(s): {', '.join(sorted(unknown))}")
        with self._lock:
            self._config = replace(self._config, **changes)

    @property
    def tracked_keys(self) -> int:
        """Number of keys currently holding a record (expired ones are evicted lazily)."""
        with self._lock:
            return len(self._records)


def create_rate_limiter(*, clock: Optional[Clock] = None) -> RateLimiter:
    """Build a limiter from the configured budget (config file, then environment)."""
    return RateLimiter(get_rate_limiter_config(), clock=clock)


# Process-wide default instance.
rate_limiter = create_rate_limiter()


__all__ = [
    "RateLimiterConfig",
    "RateLimiter",
    "create_rate_limiter",
    "rate_limiter",
]
