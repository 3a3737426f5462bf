# File: tests/test_security.py

import time
from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import Settings
from app.core.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SETTINGS = Settings(JWT_KEY="unit-test-secret-0123456789", DATABASE_URL="sqlite://")


def test_hash_password_is_not_plaintext_and_verifies():
    hashed = hash_password("secret123", rounds=4)
    assert hashed != "secret123"
    assert hashed.startswith("$2")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_passwords_past_72_bytes_hash_and_verify():
    hashed = hash_password("é" * 50, rounds=4)
    assert verify_password("é" * 50, hashed)
    assert not verify_password("e" * 100, hashed)


def test_token_round_trip_carries_user_id_and_email():
    token = create_access_token(SETTINGS, user_id="abc123", email="a@b.com")
    payload = decode_access_token(SETTINGS, token)
    assert payload["userId"] == "abc123"
    assert payload["email"] == "a@b.com"
    assert "exp" in payload


def test_token_expires_after_one_hour_by_default():
    token = create_access_token(SETTINGS, user_id="abc123", email="a@b.com")
    claims = jwt.get_unverified_claims(token)
    assert 3500 < claims["exp"] - time.time() <= 3600


def test_expired_token_is_rejected():
    token = create_access_token(
        SETTINGS, user_id="abc123", email="a@b.com", expires_delta=timedelta(seconds=-5)
    )
    with pytest.raises(TokenError):
        decode_access_token(SETTINGS, token)


def test_token_signed_with_other_key_is_rejected():
    other = Settings(JWT_KEY="another-secret-key-987654321", DATABASE_URL="sqlite://")
    token = create_access_token(other, user_id="abc123", email="a@b.com")
    with pytest.raises(TokenError):
        decode_access_token(SETTINGS, token)


def test_token_without_user_id_is_rejected():
    token = jwt.encode({"email": "a@b.com"}, SETTINGS.JWT_KEY, algorithm="HS256")
    with pytest.raises(TokenError):
        decode_access_token(SETTINGS, token)


def test_garbage_token_is_rejected():
    with pytest.raises(TokenError):
        decode_access_token(SETTINGS, "not-a-jwt")
