"""Typed configuration object for provider adapter construction.

Purpose
-------
Capture the per-instance settings every adapter needs: the credential, an
optional endpoint override and the request deadline. Adapters are stateless
across calls apart from this configuration.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. Pydantic raises
  ``ValidationError`` for wrongly typed inputs or a negative timeout.
- A missing or empty API key is the caller's responsibility; the value is
  carried through as given.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config.defaults import DEFAULT_TIMEOUT_MS


class AdapterConfig(BaseModel):
    """Provider adapter initialization parameters.

    Attributes
    ----------
    api_key:
        Secret credential forwarded to the provider.
    endpoint:
        Optional base URL override (proxies, regional gateways). When ``None``
        the adapter's built-in endpoint is used.
    timeout:
        Request deadline in milliseconds applied to each dispatch. ``0`` or
        ``None`` select the default; negative values are rejected.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    endpoint: Optional[str] = None
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("timeout", mode="before")
    @classmethod
    def _unset_timeout_uses_default(cls, value: Any) -> Any:
        # 0 and None mean "not configured"
        return value or DEFAULT_TIMEOUT_MS

    @classmethod
    def coerce(cls, value: Union["AdapterConfig", Mapping[str, Any]]) -> "AdapterConfig":
        """Return ``value`` as an ``AdapterConfig``, validating plain mappings."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))


__all__ = ["AdapterConfig"]
