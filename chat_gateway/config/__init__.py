"""Unified configuration layer for the gateway.

Goals
-----
* Centralize defaults (base URLs, timeouts, rate-limit budgets).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``CHAT_GATEWAY_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENAI_API_KEY``, ``QWEN_BASE_URL``)
    4. In-code overrides passed to the helper
* Provide a single call site per concern: ``get_provider_config``,
  ``load_adapter_config`` and ``get_rate_limiter_config``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_TIMEOUT_MS
e.g. OPENAI_API_KEY, GEMINI_BASE_URL. API keys also honour the vendor aliases
listed in :mod:`chat_gateway.config.env`.

External Config File (Optional)
-------------------------------
Structure example::

    openai:
      base_url: https://proxy.internal/v1
      timeout_ms: 30000
    qwen:
      api_key: sk-...
    rate_limit:
      max_requests_per_minute: 120

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* load_adapter_config(provider: str, overrides: dict | None = None) -> AdapterConfig
* get_rate_limiter_config() -> RateLimiterConfig
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

import yaml

from .defaults import (
    DEFAULT_ENDPOINTS,
    DEFAULT_MAX_REQUESTS_PER_MINUTE,
    DEFAULT_WINDOW_SIZE_MS,
)
from .env import resolve_provider_key

if TYPE_CHECKING:
    from ..base.dto import AdapterConfig
    from ..base.resilience.rate_limiter import RateLimiterConfig


CONFIG_FILE_ENV = "CHAT_GATEWAY_CONFIG_FILE"
RATE_LIMIT_RPM_ENV = "CHAT_GATEWAY_RATE_LIMIT_RPM"
RATE_LIMIT_WINDOW_ENV = "CHAT_GATEWAY_RATE_LIMIT_WINDOW_MS"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    name: {"base_url": url}
    for name, url in DEFAULT_ENDPOINTS.items()
}

ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
    "timeout_ms": "TIMEOUT_MS",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional JSON/YAML configuration file.

    JSON is tried first; YAML is the fallback since it is a superset for the
    shapes used here. Unreadable or non-mapping documents yield ``{}``.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config file (used by tests and reloads)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    key, _env_name = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def load_adapter_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> "AdapterConfig":
    """Build an :class:`AdapterConfig` for ``provider`` from merged configuration.

    Raises
    ------
    pydantic.ValidationError
        When no API key is configured or the timeout is not a positive integer.
    """
    # Local import to break the config <-> base import cycle
    from ..base.dto import AdapterConfig
    from ..base.timeouts import get_timeout_config

    cfg = get_provider_config(provider, overrides)
    return AdapterConfig(
        api_key=cfg.get("api_key"),
        endpoint=cfg.get("base_url"),
        timeout=cfg.get("timeout_ms") or get_timeout_config().request_timeout_ms,
    )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_rate_limiter_config() -> "RateLimiterConfig":
    """Return the rate limiter budget from file and environment settings."""
    from ..base.resilience.rate_limiter import RateLimiterConfig

    section = _load_external_config().get("rate_limit")
    file_cfg = section if isinstance(section, dict) else {}
    rpm = int(file_cfg.get("max_requests_per_minute", DEFAULT_MAX_REQUESTS_PER_MINUTE))
    window = int(file_cfg.get("window_size_ms", DEFAULT_WINDOW_SIZE_MS))
    return RateLimiterConfig(
        max_requests_per_minute=_int_env(RATE_LIMIT_RPM_ENV, rpm),
        window_size_ms=_int_env(RATE_LIMIT_WINDOW_ENV, window),
    )


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "load_adapter_config",
    "get_rate_limiter_config",
    "reset_config_cache",
]
