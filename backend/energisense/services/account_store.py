"""
Account Store
=============

Data access for the users collection.

Documents look like:
    {
        "_id": ObjectId(...),
        "email": "admin@example.com",     # unique, lowercased
        "password_hash": "$2b$10$...",     # bcrypt, never returned to clients
        "role": "admin"                    # "user" or "admin"
    }

Author: EnergiSense Team
"""

import logging
from typing import Optional

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from energisense.models import AccountResponse, Role

logger = logging.getLogger(__name__)


class DuplicateAccountError(Exception):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(f"User {email} already exists")
        self.email = email


class AccountStore:
    """Data access for the users collection."""

    COLLECTION = "users"

    # Never send this field anywhere outside the service layer
    HIDDEN_FIELDS = {"password_hash": 0}

    def __init__(self, db: Database):
        self.collection = db[self.COLLECTION]


    def ensure_indexes(self):
        """Unique email index - the database enforces what create() checks."""
        self.collection.create_index([("email", ASCENDING)], unique=True)


    def find_by_email(self, email: str) -> Optional[dict]:
        """Get the raw document (hash included) for an email, or None."""
        return self.collection.find_one({"email": email})


    def create(self, email: str, password_hash: str, role: Role) -> AccountResponse:
        """
        Insert a new account.

        Raises:
            DuplicateAccountError: If the email is already registered
        """
        if self.find_by_email(email) is not None:
            raise DuplicateAccountError(email)

        doc = {
            "email": email,
            "password_hash": password_hash,
            "role": Role(role).value,
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateAccountError(email)

        doc["_id"] = result.inserted_id
        return AccountResponse.from_document(doc)


    def list_accounts(self) -> list[AccountResponse]:
        """All accounts, sorted by email, without password hashes."""
        cursor = self.collection.find({}, self.HIDDEN_FIELDS).sort("email", ASCENDING)
        return [AccountResponse.from_document(doc) for doc in cursor]


    def count(self) -> int:
        return self.collection.count_documents({})
