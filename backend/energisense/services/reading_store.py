"""
Reading Store
=============

Persists energy readings and reads back the latest window.

WHAT IT DOES:
------------
1. insert() - one document per call, server-assigned timestamp, no dedup
2. latest() - the newest N readings, handed back OLDEST FIRST

THE WINDOW TRICK:
----------------
The query runs newest-first with a limit (so Mongo only returns N docs),
then the list is reversed in memory. Charts draw left to right, so clients
rely on ascending order.

Author: EnergiSense Team
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo import DESCENDING
from pymongo.database import Database

from energisense.models import DEFAULT_READING_TYPE, ReadingResponse

logger = logging.getLogger(__name__)


def _now_ms() -> datetime:
    """Current UTC time truncated to milliseconds (BSON date precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class ReadingStore:
    """Data access for the readings collection."""

    COLLECTION = "readings"

    def __init__(self, db: Database):
        self.collection = db[self.COLLECTION]


    def ensure_indexes(self):
        """Index on timestamp so latest() doesn't scan the collection."""
        self.collection.create_index([("timestamp", DESCENDING)])


    def insert(
        self,
        value: float,
        reading_type: str = DEFAULT_READING_TYPE,
        sensor_id: Optional[str] = None,
    ) -> ReadingResponse:
        """
        Store one reading with a server-generated timestamp.

        Args:
            value: Validated, non-negative reading value
            reading_type: Unit / type tag (e.g. "kWh")
            sensor_id: Reporting sensor, if the client sent one

        Returns:
            The stored reading, including its new id
        """
        doc = {
            "sensor_id": sensor_id,
            "value": float(value),
            "type": reading_type,
            "timestamp": _now_ms(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return ReadingResponse.from_document(doc)


    def latest(self, limit: int) -> list[ReadingResponse]:
        """
        Get the most recent `limit` readings, oldest first.

        Ties on timestamp are broken by _id so two readings stored in the
        same millisecond still come back in insertion order.
        """
        # limit(0) means "no limit" to Mongo
        if limit <= 0:
            return []

        cursor = (
            self.collection.find()
            .sort([("timestamp", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        readings = [ReadingResponse.from_document(doc) for doc in cursor]
        readings.reverse()
        return readings


    def count(self) -> int:
        return self.collection.count_documents({})
