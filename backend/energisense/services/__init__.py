"""
Services Package
================

These are the "workers" that do the actual work.

- ReadingStore: Saves readings and reads back the latest window
- AccountStore: Saves and looks up user accounts
- AuthService: Hashes passwords, checks logins, signs and verifies tokens
- DataInjector: Pretends to be a sensor and POSTs readings on a timer
"""

import logging
import sys

# One log format for the whole backend
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(message)s',
    datefmt='%H:%M:%S',
    handlers=[logging.StreamHandler(sys.stderr)]
)

from .database import connect, ping
from .reading_store import ReadingStore
from .account_store import AccountStore, DuplicateAccountError
from .auth_service import AuthService, AuthError, InvalidCredentialsError
from .data_injector import DataInjector

__all__ = [
    "connect",
    "ping",
    "ReadingStore",
    "AccountStore",
    "DuplicateAccountError",
    "AuthService",
    "AuthError",
    "InvalidCredentialsError",
    "DataInjector",
]
