from __future__ import annotations

import dataclasses

import pytest

from changetip_client.config_types import ClientConfig, TipRequest


def test_defaults() -> None:
    cfg = ClientConfig()
    assert cfg.credential is None
    assert cfg.authentication_mode == "access_token"
    assert cfg.api_host == "api.changetip.com"
    assert cfg.auth_host == "www.changetip.com"
    assert cfg.dev_mode is False
    assert cfg.effective_version() == "2"


def test_config_is_frozen() -> None:
    cfg = ClientConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.credential = "x"  # type: ignore[misc]


def test_from_options_keeps_defaults_for_omitted_fields() -> None:
    cfg = ClientConfig.from_options({"credential": "key", "api_version": 1, "host": None, "unknown": "x"})
    assert cfg.credential == "key"
    assert cfg.effective_version() == "1"
    assert cfg.api_host == "api.changetip.com"


def test_from_options_accepts_legacy_aliases() -> None:
    cfg = ClientConfig.from_options(
        {
            "api_key_or_access_token": "key",
            "authentication_type": "api_key",
            "host": "api.example.test",
            "dev_mode": 1,
        }
    )
    assert cfg.credential == "key"
    assert cfg.authentication_mode == "api_key"
    assert cfg.api_host == "api.example.test"
    assert cfg.dev_mode is True


def test_from_options_none() -> None:
    assert ClientConfig.from_options(None) == ClientConfig()


def test_tip_request_from_mapping_payload_order() -> None:
    tip = TipRequest.from_mapping({"receiver": "bob", "channel": "twitter", "message": "1 coffee"})
    assert list(tip.to_payload()) == ["message", "receiver", "context_uid", "context_url", "sender", "channel"]
    assert tip.sender is None
