"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .data import router as data_router
from .auth import router as auth_router
from .admin import router as admin_router
from .deps import set_services

__all__ = [
    "data_router",
    "auth_router",
    "admin_router",
    "set_services",
]
