# ==============================================================================
# SECURITY UNIT TESTS
# ==============================================================================
# Password hashing and JWT operations
# ==============================================================================

from datetime import timedelta

import pytest
from jose import jwt

from thinklock.core.exceptions import InvalidTokenError, TokenExpiredError
from thinklock.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from thinklock.core.settings import settings


class TestPasswordHashing:
    """Test suite for Argon2 password hashing."""

    def test_hash_password_argon2(self):
        hashed = hash_password("TestPassword123!")

        assert hashed != "TestPassword123!"
        assert hashed.startswith("$argon2")

    def test_verify_password(self):
        hashed = hash_password("TestPassword123!")

        assert verify_password("TestPassword123!", hashed) is True
        assert verify_password("WrongPassword456!", hashed) is False

    def test_verify_without_hash(self):
        assert verify_password("TestPassword123!", None) is False
        assert verify_password("TestPassword123!", "not-a-hash") is False

    def test_salted(self):
        assert hash_password("same") != hash_password("same")


class TestAccessTokens:
    """Test suite for JWT access tokens."""

    def test_round_trip_claims(self):
        payload = decode_token(create_access_token("student-1", "student"))

        assert payload["sub"] == "student-1"
        assert payload["role"] == "student"
        assert payload["type"] == "access"
        assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_expired(self):
        token = create_access_token("student-1", "student", expires_delta=timedelta(seconds=-1))

        with pytest.raises(TokenExpiredError):
            decode_token(token)

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "student-1", "type": "access"}, "another-secret", algorithm=settings.ALGORITHM
        )

        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_wrong_type(self):
        token = jwt.encode(
            {"sub": "student-1", "type": "refresh"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM
        )

        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_missing_subject(self):
        token = jwt.encode({"type": "access"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_malformed(self):
        with pytest.raises(InvalidTokenError):
            decode_token("not.a.jwt")
