"""
Models Package
==============

This is where all our data models live.
Import from here instead of the individual files.

Example:
    from energisense.models import InjectReadingRequest, Role
"""

from .reading import (
    DEFAULT_READING_TYPE,

    # What the injector sends us
    InjectReadingRequest,

    # What we send back
    ReadingResponse,
)
from .account import (
    Role,

    # What clients send us
    RegisterRequest,
    LoginRequest,

    # What we send back
    AccountResponse,
    RegisterResponse,
    LoginResponse,

    # Decoded bearer token
    TokenPayload,
)

__all__ = [
    "DEFAULT_READING_TYPE",
    "InjectReadingRequest",
    "ReadingResponse",
    "Role",
    "RegisterRequest",
    "LoginRequest",
    "AccountResponse",
    "RegisterResponse",
    "LoginResponse",
    "TokenPayload",
]
