"""
Unit tests for password hashing, login and tokens.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from energisense.config import Config
from energisense.models import Role
from energisense.services import AuthError, AuthService, DuplicateAccountError, InvalidCredentialsError


class TestPasswords:

    def test_default_cost_factor_is_10(self, account_store):
        assert Config.BCRYPT_ROUNDS == 10
        service = AuthService(account_store, secret="unit-test-secret")
        assert service.hash_password("password123").startswith("$2b$10$")

    def test_hash_is_not_plaintext_and_verifies(self, auth_service):
        hashed = auth_service.hash_password("password123")
        assert "password123" not in hashed
        assert auth_service.check_password("password123", hashed)
        assert not auth_service.check_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self, auth_service):
        assert not auth_service.check_password("password123", "not-a-bcrypt-hash")


class TestRegisterAndLogin:

    def test_register_stores_hash_only(self, auth_service, account_store):
        auth_service.register("Admin@Example.com", "password123", Role.ADMIN)

        doc = account_store.find_by_email("admin@example.com")
        assert doc is not None
        assert doc["role"] == "admin"
        assert doc["password_hash"] != "password123"

    def test_register_twice_fails(self, auth_service):
        auth_service.register("a@example.com", "x")
        with pytest.raises(DuplicateAccountError):
            auth_service.register("a@example.com", "y")

    def test_login_returns_token_role_email(self, auth_service):
        auth_service.register("a@example.com", "secret", Role.USER)

        result = auth_service.login("a@example.com", "secret")

        assert result.email == "a@example.com"
        assert result.role == Role.USER
        payload = auth_service.verify_token(result.token)
        assert payload.email == "a@example.com"
        assert payload.role == Role.USER

    def test_wrong_password_and_unknown_email_look_the_same(self, auth_service):
        auth_service.register("a@example.com", "secret")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            auth_service.login("a@example.com", "nope")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            auth_service.login("ghost@example.com", "secret")

        assert str(wrong_password.value) == str(unknown_email.value) == "Invalid credentials"


class TestTokens:

    def test_token_carries_identity_and_expires_in_5_hours(self, auth_service, admin_account):
        token = auth_service.issue_token(admin_account)
        claims = jwt.decode(token, auth_service.secret, algorithms=["HS256"])

        assert claims["sub"] == admin_account.id
        assert claims["email"] == admin_account.email
        assert claims["role"] == "admin"
        assert claims["exp"] - claims["iat"] == 5 * 3600

    def test_expired_token_rejected(self, auth_service, admin_account):
        issued = datetime.now(timezone.utc) - timedelta(hours=5, minutes=1)
        token = auth_service.issue_token(admin_account, now=issued)

        with pytest.raises(AuthError, match="expired"):
            auth_service.verify_token(token)

    def test_token_signed_with_other_secret_rejected(self, auth_service, admin_account):
        other = AuthService(auth_service.account_store, secret="someone-else", bcrypt_rounds=4)
        token = other.issue_token(admin_account)

        with pytest.raises(AuthError):
            auth_service.verify_token(token)

    def test_garbage_token_rejected(self, auth_service):
        with pytest.raises(AuthError):
            auth_service.verify_token("not.a.token")

    def test_token_without_role_rejected(self, auth_service):
        token = jwt.encode(
            {"sub": "123", "email": "a@example.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            auth_service.secret,
            algorithm="HS256",
        )
        with pytest.raises(AuthError, match="identity"):
            auth_service.verify_token(token)


class TestBootstrap:

    def test_seeds_admin_when_empty(self, auth_service, account_store):
        account = auth_service.bootstrap_admin("root@example.com", "rootpass")

        assert account is not None
        assert account.role == Role.ADMIN
        assert auth_service.login("root@example.com", "rootpass").role == Role.ADMIN

    def test_does_nothing_when_accounts_exist(self, auth_service, account_store, user_account):
        assert auth_service.bootstrap_admin("root@example.com", "rootpass") is None
        assert account_store.find_by_email("root@example.com") is None
