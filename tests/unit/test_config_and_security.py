"""Tests for settings validation, JWT round trip and password hashing."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from villagetech.core.config import Settings
from villagetech.infrastructure.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)


def test_settings_require_secret_key() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(_env_file=None, secret_key="")


def test_settings_require_gotrue_credentials() -> None:
    with pytest.raises(ValidationError, match="GOTRUE_URL"):
        Settings(_env_file=None, secret_key="k", identity_backend="gotrue")


def test_settings_reject_unknown_identity_backend() -> None:
    with pytest.raises(ValidationError, match="identity_backend"):
        Settings(_env_file=None, secret_key="k", identity_backend="ldap")


def test_settings_portal_url() -> None:
    settings = Settings(
        _env_file=None, secret_key="k", portal_url_template="https://{subdomain}.portal.test"
    )
    assert settings.portal_url_for("sunset-ridge") == "https://sunset-ridge.portal.test"
    with pytest.raises(ValidationError, match="placeholder"):
        Settings(_env_file=None, secret_key="k", portal_url_template="https://portal.test")


def test_token_round_trip() -> None:
    token = create_access_token("user-1", extra_claims={"role": "admin_head"})
    payload = verify_token(token)
    assert payload["sub"] == "user-1"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-jwt")


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("Qz4!mT9^rW2-kP7x")
    assert hashed != "Qz4!mT9^rW2-kP7x"
    assert verify_password("Qz4!mT9^rW2-kP7x", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("anything", "not-a-bcrypt-hash")
