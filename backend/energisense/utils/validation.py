"""
Input Validation Utilities
===========================

Common validation functions for account and reading inputs.

Author: EnergiSense Team
"""

import math
import re


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    """
    Normalize an email address for storage and lookup.

    Args:
        email: Raw email string from a request

    Returns:
        The email stripped of surrounding whitespace and lowercased
    """
    return email.strip().lower()


def validate_email(email: str) -> bool:
    """
    Validate the shape of an email address.

    This is a sanity check (something@domain.tld), not RFC 5322.

    Args:
        email: Email string (e.g., "admin@example.com")

    Returns:
        True if valid, False otherwise
    """
    if not email or len(email) > 254:
        return False
    return bool(EMAIL_PATTERN.match(email))


def validate_password(password: str) -> bool:
    """
    Validate a password before hashing.

    bcrypt only looks at the first 72 bytes, so anything longer is refused
    instead of being silently truncated.

    Args:
        password: Plaintext password

    Returns:
        True if valid, False otherwise
    """
    if not password:
        return False
    return len(password.encode("utf-8")) <= 72


def validate_reading_value(value: float) -> bool:
    """
    Validate a reading value (finite and non-negative).

    Args:
        value: Reading value

    Returns:
        True if valid, False otherwise
    """
    return math.isfinite(value) and value >= 0
