"""
Utility modules for the EnergiSense backend.
"""

from energisense.utils.validation import (
    normalize_email,
    validate_email,
    validate_password,
    validate_reading_value,
)

__all__ = [
    "normalize_email",
    "validate_email",
    "validate_password",
    "validate_reading_value",
]
