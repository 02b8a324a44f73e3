"""
Gateway Base Package

Exports the provider-agnostic contracts, DTOs, error taxonomy and the adapter
factory used by every provider package:
- Interfaces: the ``ChatAdapter`` capability contract and ``BaseAdapter``
- Models (DTOs): serialization-friendly request/response objects
- Errors: ``ErrorCode`` / ``AdapterError``
- Factory: lazy creation of provider adapters by canonical id
- Resilience: the sliding-window ``RateLimiter``
"""

from .adapter import BaseAdapter
from .constants import Provider
from .dto import AdapterConfig
from .errors import AdapterError, ErrorCode, ErrorResponse, classify_exception, error_for_status
from .factory import AdapterFactory, UnsupportedProviderError, create_adapter
from .interfaces import ChatAdapter
from .models import ChatMessage, ChatRequest, ChatResponse, Role, TokenUsage
from .resilience import RateLimiter, RateLimiterConfig, rate_limiter
from .timeouts import TimeoutConfig, get_timeout_config, with_deadline

__all__ = [
    # Models
    "Role",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "TokenUsage",
    "AdapterConfig",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    "AdapterError",
    "classify_exception",
    "error_for_status",
    # Contracts
    "Provider",
    "ChatAdapter",
    "BaseAdapter",
    # Factory
    "AdapterFactory",
    "UnsupportedProviderError",
    "create_adapter",
    # Resilience & timeouts
    "RateLimiter",
    "RateLimiterConfig",
    "rate_limiter",
    "TimeoutConfig",
    "get_timeout_config",
    "with_deadline",
]
