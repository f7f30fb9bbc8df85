"""Tests for password hashing and access tokens."""
import pytest
from datetime import timedelta
from fastapi import HTTPException
from jose import jwt

from fairshare.core.auth import create_access_token, decode_access_token
from fairshare.core.config import settings
from fairshare.core.security import hash_password, verify_password


class TestPasswordHashing:

    def test_hash_is_salted(self):
        hash1 = hash_password("MySecurePassword123")
        hash2 = hash_password("MySecurePassword123")

        assert isinstance(hash1, str)
        assert hash1 != hash2

    def test_verify_password(self):
        hashed = hash_password("MySecurePassword123")

        assert verify_password("MySecurePassword123", hashed) is True
        assert verify_password("WrongPassword456", hashed) is False
        assert verify_password("", hashed) is False

    def test_special_characters(self):
        special_password = "P@$$w0rd!#%&*()_+-=[]{}|;:,.<>?"
        hashed = hash_password(special_password)

        assert verify_password(special_password, hashed) is True
        assert verify_password("P@$$w0rd!", hashed) is False


class TestAccessToken:

    def test_round_trip_subject(self):
        token = create_access_token("507f1f77bcf86cd799439011")

        assert decode_access_token(token) == "507f1f77bcf86cd799439011"

    def test_default_expiry(self):
        token = create_access_token("u1")
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])

        assert payload["exp"] - payload["iat"] == settings.JWT_EXPIRATION_MINUTES * 60

    def test_expired_token_rejected(self):
        token = create_access_token("u1", expires_delta=timedelta(minutes=-5))

        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "u1"}, "some-other-secret", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_token_without_subject_rejected(self):
        token = jwt.encode({"foo": "bar"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(HTTPException):
            decode_access_token(token)
