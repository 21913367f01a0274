"""Utility functions for time handling."""

from .timestamps import (
    ensure_utc,
    format_display_date,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "format_display_date",
]
