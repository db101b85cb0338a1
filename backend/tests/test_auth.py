"""
Tests for password hashing, access tokens and AuthService.
"""

from datetime import timedelta

import pytest
from jose import jwt

from wms.exceptions import AuthError, ConflictError
from wms.schemas import UserLogin, UserRegister
from wms.services import AuthService
from wms.utils.auth_internal import (
    create_access_token,
    decode_access_token,
    hash_password,
    user_id_from_token,
    verify_password,
)

from conftest import TEST_PASSWORD


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("hunter22")
        assert hashed != "hunter22"
        assert verify_password("hunter22", hashed)
        assert not verify_password("hunter23", hashed)

    def test_missing_or_garbage_hash(self):
        assert not verify_password("x", None)
        assert not verify_password("x", "not-a-bcrypt-hash")


class TestTokens:
    def test_round_trip_carries_user_id(self):
        token = create_access_token(42, "a@example.com")
        assert user_id_from_token(token) == 42
        assert decode_access_token(token)["email"] == "a@example.com"

    def test_expired_token_is_rejected(self):
        token = create_access_token(42, "a@example.com", expires_delta=timedelta(seconds=-5))
        assert decode_access_token(token) is None
        assert user_id_from_token(token) is None

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode(
            {"sub": "42", "type": "access", "iss": "wms-ledger"}, "some-other-key", algorithm="HS256"
        )
        assert user_id_from_token(token) is None


class TestAuthService:
    def test_register_normalises_email(self, session):
        user = AuthService(session).register(
            UserRegister(name="Ops", email="Ops@Example.com", password="secret123")
        )
        assert user.email == "ops@example.com"
        assert user.password_hash != "secret123"

    def test_duplicate_email_conflicts(self, session, actor):
        with pytest.raises(ConflictError):
            AuthService(session).register(
                UserRegister(name="Again", email="ACTOR@example.com", password="secret123")
            )

    def test_login_issues_token(self, session, actor):
        result = AuthService(session).login(UserLogin(email="actor@example.com", password=TEST_PASSWORD))
        assert result.token_type == "bearer"
        assert result.user.id == actor.id
        assert user_id_from_token(result.access_token) == actor.id

    def test_wrong_password(self, session, actor):
        with pytest.raises(AuthError, match="Invalid email or password"):
            AuthService(session).login(UserLogin(email="actor@example.com", password="wrong-pass"))

    def test_unknown_email(self, session):
        with pytest.raises(AuthError, match="Invalid email or password"):
            AuthService(session).login(UserLogin(email="nobody@example.com", password=TEST_PASSWORD))

    def test_inactive_user(self, session, actor):
        actor.is_active = False
        session.commit()
        with pytest.raises(AuthError):
            AuthService(session).login(UserLogin(email="actor@example.com", password=TEST_PASSWORD))
