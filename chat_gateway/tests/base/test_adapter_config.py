from __future__ import annotations

import pytest
from pydantic import ValidationError

from chat_gateway.base.dto import AdapterConfig


def test_defaults():
    cfg = AdapterConfig(api_key="sk-live")
    assert cfg.endpoint is None
    assert cfg.timeout == 60000


def test_coerce_mapping_and_passthrough():
    cfg = AdapterConfig.coerce({"api_key": "k", "endpoint": "https://proxy/v1", "timeout": 500})
    assert cfg.endpoint == "https://proxy/v1"
    assert cfg.timeout == 500
    assert AdapterConfig.coerce(cfg) is cfg


def test_api_key_hidden_from_repr():
    assert "sk-secret" not in repr(AdapterConfig(api_key="sk-secret"))


@pytest.mark.parametrize("timeout", [0, None])
def test_unset_timeout_uses_default(timeout):
    assert AdapterConfig(api_key="k", timeout=timeout).timeout == 60000


def test_negative_timeout_rejected():
    with pytest.raises(ValidationError):
        AdapterConfig(api_key="k", timeout=-5)


def test_config_is_frozen():
    cfg = AdapterConfig(api_key="k")
    with pytest.raises(ValidationError):
        cfg.timeout = 1  # type: ignore[misc]
