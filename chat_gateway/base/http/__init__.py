"""HTTP utilities package for adapters.

Exposes the async client constructor.
"""

from .client import USER_AGENT, create_async_client

__all__ = ["USER_AGENT", "create_async_client"]
