"""
Unit tests for core.security module.
Tests password hashing, token helpers and JWT creation/validation.
"""
import pytest
import datetime as dt
from fakeso.core.security import (
    hash_password,
    verify_password,
    random_token,
    deterministic_hash,
    create_access_token,
    decode_access_token,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    TOKEN_BYTES,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_password_is_not_plain_text(self):
        password = "TestPassword123"
        hashed = hash_password(password)
        assert isinstance(hashed, str)
        assert hashed != password

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False

    def test_verify_password_unrecognised_hash_raises(self):
        """A corrupt stored hash is an error, not a mismatch."""
        with pytest.raises(ValueError):
            verify_password("whatever", "not-a-real-hash")


class TestTokens:
    """Tests for random and deterministic token helpers."""

    def test_random_token_is_hex_of_expected_length(self):
        token = random_token()
        assert len(token) == TOKEN_BYTES * 2
        int(token, 16)  # hex only

    def test_random_token_custom_size(self):
        assert len(random_token(6)) == 12

    def test_random_tokens_differ(self):
        assert random_token() != random_token()

    def test_deterministic_hash_is_stable_sha256(self):
        assert deterministic_hash("12345") == deterministic_hash("12345")
        assert deterministic_hash("12345") != deterministic_hash("12346")
        assert deterministic_hash("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestJWTTokens:
    """Tests for JWT token creation and validation."""

    def test_create_access_token_contains_user_id(self):
        token = create_access_token("test-user-456")
        payload = decode_access_token(token)
        assert payload["sub"] == "test-user-456"
        assert payload["userId"] == "test-user-456"

    def test_create_access_token_has_expiration(self):
        payload = decode_access_token(create_access_token("test-user-exp"))
        assert "iat" in payload
        assert payload["exp"] > dt.datetime.utcnow().timestamp()
        diff_minutes = (payload["exp"] - payload["iat"]) / 60
        assert abs(diff_minutes - ACCESS_TOKEN_EXPIRE_MINUTES) < 1

    def test_decode_access_token_invalid_token(self):
        with pytest.raises(Exception):  # jwt.InvalidTokenError or similar
            decode_access_token("invalid.token.here")

    def test_decode_access_token_wrong_secret(self):
        token = create_access_token("test-user-secret")
        import jwt
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "wrong-secret", algorithms=["HS256"])
