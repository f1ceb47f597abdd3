"""
Data API Router
===============

The read and write paths for energy readings.

ALL ENDPOINTS:
-------------
POST   /api/data           - Store one reading (no auth - used by the injector)
POST   /api/data/inject    - Same thing, the path older injectors use
GET    /api/data/latest    - Latest window of readings, oldest first (needs a token)

TRUST BOUNDARY:
--------------
Ingestion is deliberately open: anything that can reach the API can post a
reading. That's fine for a simulated sensor on a local network and nothing
more.

Author: EnergiSense Team
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from energisense.config import Config
from energisense.models import InjectReadingRequest, ReadingResponse, TokenPayload
from energisense.routers.deps import get_reading_store, require_auth
from energisense.services import ReadingStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/data", tags=["data"])


# =============================================================================
# INGESTION
# =============================================================================

@router.post("", response_model=ReadingResponse, status_code=201)
@router.post("/inject", response_model=ReadingResponse, status_code=201)
def inject_reading(
    request: InjectReadingRequest,
    store: ReadingStore = Depends(get_reading_store),
):
    """
    Store one reading.

    Send us:
    - value (or valor): the number, must be >= 0
    - type: unit tag, defaults to "kWh"
    - sensorId: optional name of the sensor

    The server stamps the time. Every call inserts a new document - there's
    no deduplication.
    """
    try:
        reading = store.insert(
            value=request.value,
            reading_type=request.type,
            sensor_id=request.sensor_id,
        )
    except PyMongoError as e:
        logger.error(f"Error storing reading: {e}")
        raise HTTPException(status_code=500, detail=f"Database error: {e}")

    logger.info(f"Stored reading {reading.value} {reading.type} from {reading.sensor_id or 'unknown sensor'}")
    return reading


# =============================================================================
# QUERY
# =============================================================================

@router.get("/latest", response_model=list[ReadingResponse])
def get_latest_readings(
    user: TokenPayload = Depends(require_auth),
    store: ReadingStore = Depends(get_reading_store),
):
    """
    Get the most recent readings.

    Returns at most LATEST_WINDOW readings (50 by default), ordered oldest to
    newest so they can be charted left to right. No paging, no filters.
    """
    try:
        return store.latest(Config.LATEST_WINDOW)
    except PyMongoError as e:
        logger.error(f"Error reading latest data for {user.email}: {e}")
        raise HTTPException(status_code=500, detail=f"Database error: {e}")
