"""Shared HTTP client construction for adapters.

Purpose:
    Provide one place where adapters obtain ``httpx.AsyncClient`` instances so
    transport settings stay consistent. Deadlines are enforced by
    :func:`chat_gateway.base.timeouts.with_deadline` around dispatch, so the
    clients built here carry no read timeout of their own: a slow but live
    stream must not be terminated mid-body.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle & cleanup:
    - Clients are created per call and used as async context managers by the
      adapters. Async clients are bound to the event loop that first uses
      them, so pooling them process-wide across loops is avoided.
    - Tests inject ``httpx.MockTransport`` through the ``transport`` argument.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

USER_AGENT = "chat-gateway/0.1"


def create_async_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured for provider traffic.

    Parameters:
        transport: Optional transport override (e.g. ``httpx.MockTransport``).
        headers: Optional default headers merged over the gateway defaults.

    Returns:
        An unopened client; callers own it and must close it (``async with``).
    """
    merged = {"User-Agent": USER_AGENT}
    if headers:
        merged.update(headers)
    return httpx.AsyncClient(timeout=httpx.Timeout(None), transport=transport, headers=merged)


__all__ = ["USER_AGENT", "create_async_client"]
