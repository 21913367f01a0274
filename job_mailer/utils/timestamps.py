"""Timestamp utilities for UTC handling, parsing and display.

Job payloads arrive from a JavaScript front end, so deadlines show up as
ISO-8601 strings in a handful of shapes (``Date.toISOString()`` output,
bare dates from ``<input type="date">``). Everything is normalized to
timezone-aware UTC before it is rendered.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.

    Example:
        >>> ensure_utc(datetime(2025, 11, 4, 12, 0, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string to UTC datetime.

    Supports:
    - 2025-11-04T12:00:00.000Z
    - 2025-11-04T12:00:00+00:00
    - 2025-11-04T12:00:00
    - 2025-11-04

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return ensure_utc(datetime.strptime(iso_string.strip(), fmt))
        except ValueError:
            continue

    return None


def format_display_date(value: Optional[Union[date, datetime]], default: str = "Not specified") -> str:
    """Format a date for people, e.g. ``December 31, 2025``.

    Datetimes are shown as their UTC calendar date.

    Example:
        >>> format_display_date(datetime(2025, 12, 31, tzinfo=timezone.utc))
        'December 31, 2025'
        >>> format_display_date(None)
        'Not specified'
    """
    if value is None:
        return default

    if isinstance(value, datetime):
        value = ensure_utc(value).date()

    return f"{value.strftime('%B')} {value.day}, {value.year}"
