"""Unit tests for JWT token creation, decoding, and validation."""

from datetime import timedelta

import pytest
from jose import JWTError

from alloggiati.auth.jwt import (
    ACCESS,
    REFRESH,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
)


class TestCreateAccessToken:
    """Test access token creation."""

    def test_contains_type_access(self):
        token = create_access_token({"sub": "user-123"})
        payload = decode_token(token)
        assert payload["type"] == "access"

    def test_contains_sub_and_timestamps(self):
        token = create_access_token({"sub": "user-abc"})
        payload = decode_token(token)
        assert payload["sub"] == "user-abc"
        assert "iat" in payload
        assert "exp" in payload

    def test_custom_expiry_delta(self):
        token = create_access_token({"sub": "user-123"}, expires_delta=timedelta(hours=1))
        payload = decode_token(token)
        assert payload["sub"] == "user-123"

    def test_does_not_mutate_input(self):
        data = {"sub": "user-123"}
        create_access_token(data)
        assert data == {"sub": "user-123"}


class TestCreateRefreshToken:
    def test_contains_type_refresh(self):
        token = create_refresh_token({"sub": "user-123"})
        payload = decode_token(token)
        assert payload["type"] == "refresh"


class TestDecodeToken:
    """Test token decoding and validation."""

    def test_decode_expired_token_raises(self):
        token = create_access_token({"sub": "user-123"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_decode_invalid_token_raises(self):
        with pytest.raises(JWTError):
            decode_token("not.a.valid.token")

    def test_decode_empty_string_raises(self):
        with pytest.raises(JWTError):
            decode_token("")

    def test_expected_type_matches(self):
        token = create_refresh_token({"sub": "user-123"})
        assert decode_token(token, expected_type=REFRESH)["sub"] == "user-123"

    def test_expected_type_mismatch_raises(self):
        token = create_refresh_token({"sub": "user-123"})
        with pytest.raises(JWTError):
            decode_token(token, expected_type=ACCESS)


class TestCreateTokenPair:
    def test_returns_both_tokens(self):
        pair = create_token_pair("user-123", "user")
        assert set(pair) == {"access_token", "refresh_token", "token_type"}
        assert pair["token_type"] == "bearer"

    def test_tokens_carry_sub_and_role(self):
        pair = create_token_pair("user-123", "admin")
        access = decode_token(pair["access_token"])
        refresh = decode_token(pair["refresh_token"])
        assert access["type"] == "access"
        assert refresh["type"] == "refresh"
        assert access["sub"] == refresh["sub"] == "user-123"
        assert access["role"] == "admin"
