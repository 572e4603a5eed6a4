"""Tests for ISO 8601 datetime utilities."""

from datetime import datetime, timedelta, timezone, UTC

from usergate.utils import isodatetime


class TestToTimestamp:
    """Tests for to_timestamp()."""

    def test_utc_datetime_uses_z_suffix(self):
        """UTC datetimes should serialize with a Z suffix."""
        dt = datetime(2025, 1, 15, 10, 30, 0, tzinfo=UTC)
        assert isodatetime.to_timestamp(dt) == "2025-01-15T10:30:00Z"

    def test_naive_datetime_treated_as_utc(self):
        """Naive datetimes should be assumed to be UTC."""
        dt = datetime(2025, 1, 15, 10, 30, 0)
        assert isodatetime.to_timestamp(dt) == "2025-01-15T10:30:00Z"

    def test_other_timezone_converted_to_utc(self):
        """Offset datetimes should be converted to UTC."""
        dt = datetime(2025, 1, 15, 12, 30, 0, tzinfo=timezone(timedelta(hours=2)))
        assert isodatetime.to_timestamp(dt) == "2025-01-15T10:30:00Z"


class TestNow:
    """Tests for now() and the Unix helpers."""

    def test_now_is_utc_string(self):
        """now() should return a UTC ISO string."""
        assert isodatetime.now().endswith("Z")

    def test_now_has_microseconds(self):
        """Stored timestamps keep sub-second precision for ordering."""
        assert "." in isodatetime.now()

    def test_unix_after_is_later_than_now(self):
        """unix_after() should add the delta to the current time."""
        now = isodatetime.now_unix()
        later = isodatetime.unix_after(timedelta(hours=1))
        assert 3599 <= later - now <= 3601
