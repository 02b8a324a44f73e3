"""Pytest configuration for the gateway test suite.

HTTP is never performed for real: adapters receive an ``httpx.MockTransport``
through their ``transport`` keyword (see ``helpers``). Environment variables
consulted by the configuration layer are cleared for every test so a
developer's shell cannot leak credentials into assertions.
"""

from __future__ import annotations

import pytest

from chat_gateway.config import reset_config_cache
from chat_gateway.config.env import ENV_ALIASES, ENV_MAP

_GATEWAY_ENV = (
    "CHAT_GATEWAY_CONFIG_FILE",
    "CHAT_GATEWAY_RATE_LIMIT_RPM",
    "CHAT_GATEWAY_RATE_LIMIT_WINDOW_MS",
    "CHAT_GATEWAY_TIMEOUT_MS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Remove provider/gateway variables and reset the config file cache."""
    names = set(_GATEWAY_ENV) | set(ENV_MAP.values())
    for aliases in ENV_ALIASES.values():
        names.update(aliases)
    for provider in ENV_MAP:
        names.update({f"{provider.upper()}_BASE_URL", f"{provider.upper()}_TIMEOUT_MS"})
    for name in names:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()
