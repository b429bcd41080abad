"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address, or None for blank input

    Raises:
        ValueError: If email format is invalid
    """
    if not email or not email.strip():
        return None

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_iso_date(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD calendar date.

    Raises:
        ValueError: If the string is not in that shape or is not a real date
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValueError("Invalid date format. Expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date: {value}") from None


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """
    Normalize "H:MM", "HH:MM" or "HH:MM:SS" to "HH:MM".

    Raises:
        ValueError: If the value is not a valid 24-hour clock time
    """
    if value is None:
        return None

    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Invalid time format. Expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError("Invalid time format. Expected HH:MM")

    return f"{hours:02d}:{minutes:02d}"


def require_text(value: Optional[str], field_name: str) -> str:
    """Reject blank strings for required fields"""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()
