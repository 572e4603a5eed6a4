"""ISO 8601 datetime conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings and Unix timestamps. Stored timestamps keep microsecond
precision so that most-recent-first ordering is stable.
"""

from datetime import datetime, timedelta, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Get current UTC time as integer Unix timestamp."""
    return int(datetime.now(UTC).timestamp())


def unix_after(delta: timedelta) -> int:
    """Get the Unix timestamp `delta` from now."""
    return int((datetime.now(UTC) + delta).timestamp())
