"""
Provider-agnostic interface (Protocol) for chat adapters.

Callers that only need the capability surface (the CLI, higher layers) type
against :class:`ChatAdapter` rather than :class:`BaseAdapter`, so any object
exposing the same coroutines satisfies the contract.
"""

from __future__ import annotations

from typing import AsyncIterator, List, Protocol, runtime_checkable

from .models import ChatRequest, ChatResponse


@runtime_checkable
class ChatAdapter(Protocol):
    """Capability contract shared by every provider adapter.

    Failure handling: ``chat`` and ``chat_stream`` raise
    :class:`~chat_gateway.base.errors.AdapterError`; ``validate_api_key`` and
    ``list_models`` never raise for provider-side failures.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"qwen"``."""
        ...

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute a single chat completion request."""
        ...

    def chat_stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Return a lazy async iterator over the text deltas of a completion."""
        ...

    async def validate_api_key(self, api_key: str) -> bool:
        """Return ``True`` iff the provider accepts ``api_key``."""
        ...

    async def list_models(self) -> List[str]:
        """Return the model ids available to the caller."""
        ...


__all__ = ["ChatAdapter"]
