"""
Admin API Router
================

GET    /api/admin/users    - List every account (admin token required)

Editing and deleting accounts are not offered.

Author: EnergiSense Team
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from energisense.models import AccountResponse, TokenPayload
from energisense.routers.deps import get_account_store, require_admin
from energisense.services import AccountStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=list[AccountResponse])
def list_users(
    admin: TokenPayload = Depends(require_admin),
    store: AccountStore = Depends(get_account_store),
):
    """All accounts as {id, email, role}. Password hashes never leave the server."""
    try:
        return store.list_accounts()
    except PyMongoError as e:
        logger.error(f"Error listing users for {admin.email}: {e}")
        raise HTTPException(status_code=500, detail=f"Database error: {e}")
