"""
momentum.engine.validation — Domain Field Validators
=====================================================

Pure checks for the business constraints the services enforce regardless
of what the transport layer already validated.  No DB I/O.  Each helper
returns the normalised value or raises an :class:`~momentum.errors.InvalidInput`
subclass.
"""

from __future__ import annotations

import math
from datetime import date, datetime

from momentum.constants import EMAIL_MAX_LENGTH, EMAIL_PATTERN, MAX_DURATION_MINUTES
from momentum.errors import InvalidEmail, InvalidInput


def require_text(value: object, field_name: str, max_length: int | None = None) -> str:
    """Return *value* stripped, rejecting non-strings, blanks and text longer
    than *max_length*."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"Invalid input: '{field_name}' must be a non-empty string")
    text = value.strip()
    if max_length is not None and len(text) > max_length:
        raise InvalidInput(
            f"Invalid input: '{field_name}' must be at most {max_length} characters"
        )
    return text


def validate_email(value: object) -> str:
    email = require_text(value, "email", EMAIL_MAX_LENGTH)
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmail()
    return email


def validate_password(value: object, min_length: int) -> str:
    """Passwords are kept verbatim; only their length is checked."""
    if not isinstance(value, str) or len(value) < min_length:
        raise InvalidInput(
            f"Invalid input: 'password' must be at least {min_length} characters"
        )
    return value


def validate_duration(value: object) -> float:
    """Duration in minutes: greater than zero and at most one day."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput("Invalid input: 'duration' must be a number")
    if not math.isfinite(value) or value <= 0:
        raise InvalidInput("Invalid input: 'duration' must be a positive number of minutes")
    if value > MAX_DURATION_MINUTES:
        raise InvalidInput(
            f"Invalid input: 'duration' must be at most {MAX_DURATION_MINUTES} minutes"
        )
    return float(value)


def parse_date(value: object, field_name: str = "date") -> date:
    """Coerce *value* to a calendar date.

    Accepts a :class:`date`, a :class:`datetime` (its date part) or an
    ISO-8601 string, either ``YYYY-MM-DD`` or a full timestamp.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise InvalidInput(f"Invalid input: '{field_name}' must be a calendar date (YYYY-MM-DD)")


def validate_positive_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInput(f"Invalid input: '{field_name}' must be a positive integer")
    return value
