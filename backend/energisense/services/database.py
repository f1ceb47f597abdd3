"""
Database Connection
===================

Thin helpers around pymongo for connecting to the document store.

The whole system uses ONE database with two collections:
    readings - energy readings posted by the injector
    users    - login accounts

Author: EnergiSense Team
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


def connect(uri: str, default_db_name: str, timeout_ms: int = 5000) -> tuple[MongoClient, Database]:
    """
    Open a client and pick the database.

    The connection is lazy - pymongo only talks to the server on the first
    operation, so a down database shows up as errors on requests (and on
    /health), not as a crash at startup.

    Args:
        uri: Connection string (e.g. "mongodb://localhost:27017/energisense_db")
        default_db_name: Database to use if the URI does not name one
        timeout_ms: Server selection timeout

    Returns:
        (client, database)
    """
    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    db = client.get_default_database(default=default_db_name)
    logger.info(f"MongoDB client created for database '{db.name}'")
    return client, db


def ping(db: Optional[Database]) -> bool:
    """Return True if the server answers a ping."""
    if db is None:
        return False
    try:
        db.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False
