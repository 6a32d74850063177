"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC. Conversion to a
local zone happens only when text is rendered for people (notification e-mails).
"""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Create a UTC-aware datetime from a Unix timestamp (seconds)."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def to_timestamp_ms(dt: datetime) -> int:
    """Milliseconds since the epoch; used as the time component of storage paths."""
    return int(dt.timestamp() * 1000)


def format_local(dt: datetime, tz_name: str) -> str:
    """Format as ``dd.mm.yyyy, HH:MM:SS`` in the given IANA zone (German locale style)."""
    local = ensure_utc(dt).astimezone(ZoneInfo(tz_name))
    return local.strftime("%d.%m.%Y, %H:%M:%S")
