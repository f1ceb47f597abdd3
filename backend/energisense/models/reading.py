"""
Reading Models
==============
Pydantic models for energy readings.

A Reading is one timestamped numeric energy-consumption sample. It is created
by the ingestion endpoint, never updated, and read back in windows by the
query endpoint.

FIELD NAMES:
    The canonical value field is `value`. Older injectors send `valor` and
    `sensorId`; those spellings are accepted here, at the request boundary,
    and nowhere else.

Author: EnergiSense Team
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from energisense.utils.validation import validate_reading_value


DEFAULT_READING_TYPE = "kWh"


# =============================================================================
# REQUEST MODELS - What the injector sends to the backend
# =============================================================================

class InjectReadingRequest(BaseModel):
    """
    Request body for POST /api/data (and /api/data/inject).

    Fields:
        value: Non-negative number (alias: valor)
        type: Unit / type tag, defaults to "kWh"
        sensor_id: Optional source identifier (alias: sensorId)

    Example Request:
        POST /api/data
        {
            "value": 42.5,
            "type": "kWh",
            "sensorId": "Sensor-01 (Industrial)"
        }
    """
    value: float = Field(
        ...,
        validation_alias=AliasChoices("value", "valor"),
        description="Measured consumption, must be a non-negative number",
        examples=[42.5],
    )
    type: str = Field(
        default=DEFAULT_READING_TYPE,
        min_length=1,
        max_length=32,
        description="Unit or type tag",
        examples=["kWh"],
    )
    sensor_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sensor_id", "sensorId"),
        max_length=100,
        description="Identifier of the reporting sensor",
        examples=["Sensor-01 (Industrial)"],
    )

    @field_validator("value", mode="before")
    @classmethod
    def value_must_be_a_number(cls, v):
        # JSON numbers only: "42" and true are rejected rather than coerced
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("value must be a number")
        try:
            as_float = float(v)
        except OverflowError:
            raise ValueError("value is out of range")
        if not validate_reading_value(as_float):
            raise ValueError("value must be a finite, non-negative number")
        return as_float


# =============================================================================
# RESPONSE MODELS - What the backend returns
# =============================================================================

class ReadingResponse(BaseModel):
    """
    A stored reading, as returned by the ingestion and query endpoints.

    Timestamps are always timezone-aware UTC.
    """
    id: str = Field(..., description="Document id")
    sensor_id: Optional[str] = Field(None, description="Reporting sensor")
    value: float = Field(..., description="Measured consumption")
    type: str = Field(DEFAULT_READING_TYPE, description="Unit or type tag")
    timestamp: datetime = Field(..., description="Server-assigned timestamp (UTC)")

    @classmethod
    def from_document(cls, doc: dict) -> "ReadingResponse":
        """Build a response from a raw MongoDB document."""
        timestamp = doc["timestamp"]
        # pymongo hands back naive datetimes unless tz_aware is set
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            id=str(doc["_id"]),
            sensor_id=doc.get("sensor_id"),
            value=doc["value"],
            type=doc.get("type") or DEFAULT_READING_TYPE,
            timestamp=timestamp,
        )
