"""
Router Dependencies
===================

Two jobs live here:

1. DEPENDENCY INJECTION
   The stores and the auth service are created when the app starts (see
   main.py lifespan) and handed to us with set_services(). Endpoints get
   them back through Depends(get_reading_store) and friends.

2. THE ACCESS GATE
   require_auth  - needs a valid "Authorization: Bearer <token>" header (401 otherwise)
   require_admin - require_auth, then the token's role must be "admin" (403 otherwise)

   Usage:
       @router.get("/latest")
       def latest(user: TokenPayload = Depends(require_auth)): ...

       @router.get("/users")
       def users(admin: TokenPayload = Depends(require_admin)): ...

Author: EnergiSense Team
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from energisense.models import TokenPayload
from energisense.services import AccountStore, AuthError, AuthService, ReadingStore

logger = logging.getLogger(__name__)


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

_reading_store: Optional[ReadingStore] = None
_account_store: Optional[AccountStore] = None
_auth_service: Optional[AuthService] = None


def set_services(
    reading_store: Optional[ReadingStore],
    account_store: Optional[AccountStore],
    auth_service: Optional[AuthService],
):
    """
    Called when the app starts to give the routers their workers.

    Passing None for everything (at shutdown) puts the routers back into
    the "not started" state.
    """
    global _reading_store, _account_store, _auth_service
    _reading_store = reading_store
    _account_store = account_store
    _auth_service = auth_service


def get_reading_store() -> ReadingStore:
    if _reading_store is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _reading_store


def get_account_store() -> AccountStore:
    if _account_store is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _account_store


def get_auth_service() -> AuthService:
    if _auth_service is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _auth_service


# =============================================================================
# ACCESS GATE
# =============================================================================

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header.

    Expected format: "Bearer <token>"

    Raises:
        HTTPException(401): If the header is missing or malformed
    """
    if not authorization:
        raise _unauthorized("No token, authorization denied")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise _unauthorized("Malformed token. Expected: Bearer <token>")

    return parts[1]


def require_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> TokenPayload:
    """
    Let the request through only with a valid bearer token.

    The decoded identity is returned to the endpoint and also kept on
    request.state.user.
    """
    token = extract_bearer_token(authorization)

    try:
        user = auth.verify_token(token)
    except AuthError as e:
        logger.info(f"Rejected token on {request.url.path}: {e}")
        raise _unauthorized(str(e))

    request.state.user = user
    return user


def require_admin(user: TokenPayload = Depends(require_auth)) -> TokenPayload:
    """require_auth, plus the role has to be admin."""
    if not user.is_admin:
        logger.info(f"Non-admin {user.email} refused on an admin route")
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def optional_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[TokenPayload]:
    """
    Like require_auth, but no header at all means "anonymous" (None).

    A header that IS sent still has to be valid.
    """
    if not authorization:
        return None
    return require_auth(request, authorization, auth)
