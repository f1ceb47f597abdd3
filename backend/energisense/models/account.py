"""
Account Models
==============
Pydantic models for user accounts and authentication.

An Account is one login identity: an email (unique), a bcrypt password hash
and a role. The hash never leaves the service layer - none of the response
models below has a field for it.

ROLES:
    user  - can log in and read the dashboard data
    admin - everything a user can do, plus user management

Author: EnergiSense Team
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from energisense.utils.validation import normalize_email, validate_email, validate_password


# =============================================================================
# ENUMS
# =============================================================================

class Role(str, Enum):
    """The two roles an account can hold."""
    USER = "user"
    ADMIN = "admin"


# =============================================================================
# REQUEST MODELS
# =============================================================================

class RegisterRequest(BaseModel):
    """
    Request body for POST /api/auth/register.

    Example Request:
        {
            "email": "operator@example.com",
            "password": "password123",
            "role": "user"
        }
    """
    email: str = Field(..., description="Login email, must be unique")
    password: str = Field(..., description="Plaintext password (hashed before storage)")
    role: Role = Field(default=Role.USER, description="user or admin")

    @field_validator("email")
    @classmethod
    def email_must_look_valid(cls, v: str) -> str:
        v = normalize_email(v)
        if not validate_email(v):
            raise ValueError("That doesn't look like a valid email address")
        return v

    @field_validator("password")
    @classmethod
    def password_must_be_usable(cls, v: str) -> str:
        if not validate_password(v):
            raise ValueError("Password must be between 1 and 72 bytes")
        return v


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""
    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Plaintext password")

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        return normalize_email(v)


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class AccountResponse(BaseModel):
    """An account as shown to admins. Never carries the password hash."""
    id: str = Field(..., description="Document id")
    email: str = Field(..., description="Login email")
    role: Role = Field(..., description="user or admin")

    @classmethod
    def from_document(cls, doc: dict) -> "AccountResponse":
        """Build a response from a raw MongoDB document."""
        return cls(id=str(doc["_id"]), email=doc["email"], role=Role(doc["role"]))


class RegisterResponse(BaseModel):
    """Returned by POST /api/auth/register."""
    msg: str
    email: str
    role: Role


class LoginResponse(BaseModel):
    """
    Returned by POST /api/auth/login.

    The role and email are repeated in plaintext so the dashboard does not
    need to decode the token to pick its view.
    """
    token: str
    role: Role
    email: str


class TokenPayload(BaseModel):
    """The identity decoded from a verified bearer token."""
    user_id: str
    email: str
    role: Role
    exp: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
