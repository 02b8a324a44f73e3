"""Adapter Factory utilities.

Purpose
-------
Centralize creation of provider adapters from a provider id plus per-call
configuration. Adapters are imported lazily using ``importlib`` so importing
the factory does not pull in every provider module.

External dependencies
---------------------
- Standard library only (``importlib``).

Failure semantics
-----------------
- The factory performs no I/O, retries or fallbacks; it either returns an
  adapter instance or raises :class:`UnsupportedProviderError`.

Scope
-----
Supported providers: ``openai``, ``gemini``, ``deepseek``, ``qwen`` and
``doubao``. The Zhipu adapter exists but is only constructible directly.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Mapping, Tuple, Type, Union

from .adapter import BaseAdapter
from .constants import Provider
from .dto import AdapterConfig

ProviderId = Union[Provider, str]


class UnsupportedProviderError(ValueError):
    """Raised when a provider id is not registered in the factory mapping."""

    def __init__(self, provider: Any) -> None:
        super().__init__(f"Unsupported AI provider: {provider}")
        self.provider = provider


def _normalize(provider: ProviderId) -> str:
    if isinstance(provider, Provider):
        return provider.value
    return str(provider or "").strip().lower()


class AdapterFactory:
    """Create provider adapters based on a canonical id (e.g. ``"openai"``)."""

    # Map provider ids to (module path, class name)
    _ADAPTERS: Dict[str, Tuple[str, str]] = {
        Provider.OPENAI.value: ("chat_gateway.openai.client", "OpenAIAdapter"),
        Provider.GEMINI.value: ("chat_gateway.gemini.client", "GeminiAdapter"),
        Provider.DEEPSEEK.value: ("chat_gateway.deepseek.client", "DeepSeekAdapter"),
        Provider.QWEN.value: ("chat_gateway.qwen.client", "QwenAdapter"),
        Provider.DOUBAO.value: ("chat_gateway.doubao.client", "DoubaoAdapter"),
    }

    @classmethod
    def _resolve(cls, provider: ProviderId) -> Type[BaseAdapter]:
        entry = cls._ADAPTERS.get(_normalize(provider))
        if entry is None:
            raise UnsupportedProviderError(provider.value if isinstance(provider, Provider) else provider)
        module_path, class_name = entry
        return getattr(import_module(module_path), class_name)

    @classmethod
    def create_adapter(
        cls,
        provider: ProviderId,
        config: Union[AdapterConfig, Mapping[str, Any]],
        **kwargs: Any,
    ) -> BaseAdapter:
        """Create an adapter instance.

        Parameters
        ----------
        provider:
            :class:`Provider` member or its string id (case-insensitive).
        config:
            :class:`AdapterConfig` or mapping with ``api_key`` and optional
            ``endpoint`` / ``timeout``.
        **kwargs:
            Forwarded to the adapter constructor (e.g. ``transport``).

        Raises
        ------
        UnsupportedProviderError
            If ``provider`` is not one of :meth:`get_supported_providers`.
        """
        klass = cls._resolve(provider)
        return klass(config, **kwargs)

    @classmethod
    def get_supported_providers(cls) -> List[str]:
        """Return supported provider ids in deterministic order."""
        return list(cls._ADAPTERS)

    @classmethod
    def is_provider_supported(cls, provider: ProviderId) -> bool:
        return _normalize(provider) in cls._ADAPTERS


def create_adapter(
    provider: ProviderId,
    config: Union[AdapterConfig, Mapping[str, Any]],
    **kwargs: Any,
) -> BaseAdapter:
    """Compatibility helper that delegates to :meth:`AdapterFactory.create_adapter`."""
    return AdapterFactory.create_adapter(provider, config, **kwargs)


__all__ = [
    "AdapterFactory",
    "UnsupportedProviderError",
    "create_adapter",
]
