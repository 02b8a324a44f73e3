"""chat_gateway package

One asynchronous adapter contract over several incompatible chat-completion
HTTP APIs, plus a sliding-window request budget.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`AdapterError`, :class:`ErrorCode`
    - Factory: :func:`create_adapter`, :class:`AdapterFactory`
    - Models: :class:`ChatMessage`, :class:`ChatRequest`, :class:`ChatResponse`
    - Rate limiting: :class:`RateLimiter`, ``rate_limiter``

Example::

    adapter = create_adapter("openai", {"api_key": key})
    reply = await adapter.chat(ChatRequest(model="gpt-4o", messages=[...]))
"""

from .base import (
    AdapterConfig,
    AdapterError,
    AdapterFactory,
    ChatAdapter,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ErrorCode,
    Provider,
    RateLimiter,
    RateLimiterConfig,
    TokenUsage,
    UnsupportedProviderError,
    create_adapter,
    rate_limiter,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AdapterConfig",
    "AdapterError",
    "AdapterFactory",
    "ChatAdapter",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ErrorCode",
    "Provider",
    "RateLimiter",
    "RateLimiterConfig",
    "TokenUsage",
    "UnsupportedProviderError",
    "create_adapter",
    "rate_limiter",
]
