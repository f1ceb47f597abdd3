"""
Auth API Router
===============

ALL ENDPOINTS:
-------------
POST   /api/auth/register  - Create an account
POST   /api/auth/login     - Swap email + password for a token

WHO MAY REGISTER?
----------------
That depends on the OPEN_REGISTRATION setting:

    OPEN_REGISTRATION=false (default)
        Only an admin (Authorization: Bearer <admin token>) can create accounts.
        The first admin comes from the bootstrap seed on startup.

    OPEN_REGISTRATION=true
        Anyone can create a "user" account. Creating an "admin" account
        still needs an admin token.

Author: EnergiSense Team
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from energisense.config import Config
from energisense.models import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    Role,
    TokenPayload,
)
from energisense.routers.deps import get_auth_service, optional_auth
from energisense.services import AuthService, DuplicateAccountError, InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _check_registration_allowed(body: RegisterRequest, caller: Optional[TokenPayload]):
    """Apply the OPEN_REGISTRATION policy. Raises 401/403 when refused."""
    caller_is_admin = caller is not None and caller.is_admin

    if not Config.OPEN_REGISTRATION:
        if caller is None:
            raise HTTPException(
                status_code=401,
                detail="Registration requires an admin token",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not caller_is_admin:
            raise HTTPException(status_code=403, detail="Admin access required")
        return

    if body.role == Role.ADMIN and not caller_is_admin:
        raise HTTPException(status_code=403, detail="Only an admin can create admin accounts")


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    body: RegisterRequest,
    caller: Optional[TokenPayload] = Depends(optional_auth),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Create an account.

    Send us:
    - email: must be unique
    - password: hashed before it's stored
    - role: "user" (default) or "admin"
    """
    _check_registration_allowed(body, caller)

    try:
        account = auth.register(body.email, body.password, body.role)
    except DuplicateAccountError:
        raise HTTPException(status_code=400, detail="User already exists")
    except PyMongoError as e:
        logger.error(f"Error registering {body.email}: {e}")
        raise HTTPException(status_code=500, detail=f"Database error: {e}")

    return RegisterResponse(
        msg=f"User {account.email} ({account.role.value}) created",
        email=account.email,
        role=account.role,
    )


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Log in.

    Returns a token that's good for 5 hours, plus the role and email so the
    dashboard knows which view to show.
    """
    try:
        return auth.login(body.email, body.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=400, detail=AuthService.INVALID_CREDENTIALS)
    except PyMongoError as e:
        logger.error(f"Error during login: {e}")
        raise HTTPException(status_code=500, detail=f"Database error: {e}")
