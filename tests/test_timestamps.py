"""Unit tests for timestamp utilities."""

from datetime import date, datetime, timedelta, timezone

import pytest

from job_mailer.utils.timestamps import (
    ensure_utc,
    format_display_date,
    parse_iso_datetime,
    utc_now,
)


def test_utc_now_returns_utc_datetime():
    assert utc_now().tzinfo == timezone.utc


class TestEnsureUtc:
    """Tests for ensure_utc function."""

    def test_none(self):
        assert ensure_utc(None) is None

    def test_naive_is_treated_as_utc(self):
        result = ensure_utc(datetime(2025, 11, 4, 12, 0, 0))
        assert result == datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)

    def test_other_timezone_is_converted(self):
        eastern = timezone(timedelta(hours=-5))
        result = ensure_utc(datetime(2025, 11, 4, 7, 0, 0, tzinfo=eastern))
        assert result.hour == 12
        assert result.tzinfo == timezone.utc


class TestParseIsoDatetime:
    """Tests for parse_iso_datetime function."""

    @pytest.mark.parametrize(
        "value",
        [
            "2025-12-31T10:00:00.000Z",
            "2025-12-31T10:00:00Z",
            "2025-12-31T10:00:00+00:00",
            "2025-12-31T10:00:00",
        ],
    )
    def test_datetime_formats(self, value):
        assert parse_iso_datetime(value) == datetime(2025, 12, 31, 10, 0, tzinfo=timezone.utc)

    def test_date_only(self):
        assert parse_iso_datetime("2025-12-31") == datetime(2025, 12, 31, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "   ", "next friday", "31/12/2025"])
    def test_unparseable(self, value):
        assert parse_iso_datetime(value) is None


class TestFormatDisplayDate:
    """Tests for format_display_date function."""

    def test_datetime(self):
        assert format_display_date(datetime(2025, 12, 31, 23, 0, tzinfo=timezone.utc)) == "December 31, 2025"

    def test_date_has_no_leading_zero(self):
        assert format_display_date(date(2026, 3, 5)) == "March 5, 2026"

    def test_none_uses_default(self):
        assert format_display_date(None) == "Not specified"
        assert format_display_date(None, default="TBD") == "TBD"

    def test_aware_datetime_shown_as_utc_date(self):
        tokyo = timezone(timedelta(hours=9))
        assert format_display_date(datetime(2026, 1, 1, 5, 0, tzinfo=tokyo)) == "December 31, 2025"
