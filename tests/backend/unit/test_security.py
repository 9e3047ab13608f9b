"""
Unit tests for core.security module.
Tests password hashing, token creation/validation.
"""
import pytest
import uuid
import datetime as dt
import jwt
from jointhub.core.errors import Forbidden, Unauthenticated
from jointhub.core.security import (
    Identity,
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    issue_token,
    validate_token,
    ACCESS_TOKEN_EXPIRE_MINUTES,
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
        assert hashed.startswith("$argon2")

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False


class TestAccessTokens:
    """Tests for token creation and validation."""

    def test_token_carries_id_and_username(self):
        token = create_access_token("user-123", "alice")
        payload = decode_access_token(token)
        assert payload["sub"] == "user-123"
        assert payload["username"] == "alice"

    def test_token_has_explicit_lifetime(self):
        payload = decode_access_token(create_access_token("user-exp", "bob"))
        diff_minutes = (payload["exp"] - payload["iat"]) / 60
        assert abs(diff_minutes - ACCESS_TOKEN_EXPIRE_MINUTES) < 1
        assert payload["exp"] > dt.datetime.now(dt.timezone.utc).timestamp()

    def test_issue_then_validate_round_trip(self):
        identity = Identity(id=str(uuid.uuid4()), username="carol")
        assert validate_token(issue_token(identity)) == identity

    def test_validate_subject_that_is_not_a_user_id_is_forbidden(self):
        token = create_access_token("not-a-uuid", "ghost")
        with pytest.raises(Forbidden):
            validate_token(token)

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_validate_missing_token_is_unauthenticated(self, token):
        with pytest.raises(Unauthenticated):
            validate_token(token)

    def test_validate_malformed_token_is_forbidden(self):
        with pytest.raises(Forbidden):
            validate_token("invalid.token.here")

    def test_validate_foreign_secret_is_forbidden(self):
        token = jwt.encode(
            {"sub": "u", "username": "eve", "exp": dt.datetime.now(dt.timezone.utc) + dt.timedelta(minutes=5)},
            "wrong-secret",
            algorithm="HS256",
        )
        with pytest.raises(Forbidden):
            validate_token(token)

    def test_validate_expired_token_is_forbidden(self, monkeypatch):
        from jointhub.core import security

        monkeypatch.setattr(security, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
        token = security.create_access_token("user-old", "dan")
        with pytest.raises(Forbidden):
            validate_token(token)

    def test_validate_token_without_username_is_forbidden(self):
        from jointhub.core.security import JWT_ALG, JWT_SECRET

        token = jwt.encode(
            {"sub": "u", "exp": dt.datetime.now(dt.timezone.utc) + dt.timedelta(minutes=5)},
            JWT_SECRET,
            algorithm=JWT_ALG,
        )
        with pytest.raises(Forbidden):
            validate_token(token)
