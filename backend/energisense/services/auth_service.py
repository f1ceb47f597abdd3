"""
Auth Service
============

Registers accounts, checks logins, and signs / verifies bearer tokens.

HOW IT WORKS:
------------
    register(email, password, role)
        -> bcrypt hash (cost 10) -> AccountStore.create()

    login(email, password)
        -> look up account -> bcrypt compare -> signed JWT (5 hours)

    verify_token(token)
        -> check signature + expiry -> TokenPayload(user_id, email, role)

A failed login ALWAYS says "Invalid credentials", whether the email is
unknown or the password is wrong, so callers can't probe which emails exist.

Author: EnergiSense Team
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import ValidationError

from energisense.models import AccountResponse, LoginResponse, Role, TokenPayload
from energisense.services.account_store import AccountStore
from energisense.utils.validation import normalize_email

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """A bearer token could not be verified (maps to 401)."""


class InvalidCredentialsError(Exception):
    """Login failed. The message never says which half was wrong."""

    def __init__(self):
        super().__init__(AuthService.INVALID_CREDENTIALS)


class AuthService:
    """
    Everything to do with passwords and tokens.

    HOW TO USE:
    ----------
    auth = AuthService(account_store, secret="...")

    auth.register("operator@example.com", "password123")
    result = auth.login("operator@example.com", "password123")
    payload = auth.verify_token(result.token)
    print(payload.role)  # Role.USER
    """

    INVALID_CREDENTIALS = "Invalid credentials"

    def __init__(
        self,
        account_store: AccountStore,
        secret: str,
        expires_hours: int = 5,
        bcrypt_rounds: int = 10,
        algorithm: str = "HS256",
    ):
        """
        Set up the service.

        Args:
            account_store: Where accounts live
            secret: Token signing secret
            expires_hours: Token lifetime
            bcrypt_rounds: bcrypt cost factor (10 in production)
            algorithm: JWT signing algorithm
        """
        self.account_store = account_store
        self.secret = secret
        self.expires_hours = expires_hours
        self.bcrypt_rounds = bcrypt_rounds
        self.algorithm = algorithm


    # =========================================================================
    # PASSWORDS
    # =========================================================================

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


    def check_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Stored hash is not a bcrypt hash
            logger.error("Stored password hash is malformed")
            return False


    # =========================================================================
    # ACCOUNTS
    # =========================================================================

    def register(self, email: str, password: str, role: Role = Role.USER) -> AccountResponse:
        """
        Create an account.

        Raises:
            DuplicateAccountError: If the email is already registered
        """
        email = normalize_email(email)
        account = self.account_store.create(email, self.hash_password(password), Role(role))
        logger.info(f"Registered account {account.email} ({account.role.value})")
        return account


    def login(self, email: str, password: str) -> LoginResponse:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        doc = self.account_store.find_by_email(normalize_email(email))
        if doc is None or not self.check_password(password, doc.get("password_hash", "")):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        account = AccountResponse.from_document(doc)
        token = self.issue_token(account)
        logger.info(f"Login OK for {account.email}")
        return LoginResponse(token=token, role=account.role, email=account.email)


    def bootstrap_admin(self, email: str, password: str) -> Optional[AccountResponse]:
        """
        Seed the first admin if there are no accounts at all.

        Returns the new account, or None if accounts already exist.
        """
        if self.account_store.count() > 0:
            return None

        account = self.register(email, password, Role.ADMIN)
        logger.warning(
            f"No accounts found - created bootstrap admin {account.email}. "
            "Change BOOTSTRAP_ADMIN_PASSWORD before exposing this server."
        )
        return account


    # =========================================================================
    # TOKENS
    # =========================================================================

    def issue_token(self, account: AccountResponse, now: Optional[datetime] = None) -> str:
        """Sign a token carrying the account's id, email and role."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": account.id,
            "email": account.email,
            "role": account.role.value,
            "iat": issued_at,
            "exp": issued_at + timedelta(hours=self.expires_hours),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)


    def verify_token(self, token: str) -> TokenPayload:
        """
        Check a token's signature and expiry.

        Raises:
            AuthError: Expired, tampered, or missing identity claims
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthError("Token is not valid")

        try:
            return TokenPayload(
                user_id=claims["sub"],
                email=claims.get("email"),
                role=claims.get("role"),
                exp=claims.get("exp"),
            )
        except ValidationError:
            raise AuthError("Token is missing identity claims")
