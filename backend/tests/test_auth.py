"""
Tests for API key verification.
"""
from recap import config
from recap.auth import verify_api_key


def test_matching_key():
    assert verify_api_key("secret", expected="secret")


def test_wrong_or_missing_key():
    assert not verify_api_key("nope", expected="secret")
    assert not verify_api_key(None, expected="secret")
    assert not verify_api_key("", expected="secret")


def test_unset_key_rejects_everything(monkeypatch):
    monkeypatch.setattr(config, "API_KEY", "")
    assert not verify_api_key("anything")
    assert not verify_api_key("")


def test_uses_configured_key(monkeypatch):
    monkeypatch.setattr(config, "API_KEY", "configured")
    assert verify_api_key("configured")
