"""
UTC datetime helpers for consistent timezone handling.

Timestamps written by the service (requested_at, reviewed_at, completed_at)
are timezone-aware UTC.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() (naive, local) or
    datetime.utcnow() (naive, deprecated).
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone (SQLite returns naive values)
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_iso_date(value: str | date | None) -> date | None:
    """
    Parse an ISO 'YYYY-MM-DD' string (or pass through a date).

    Raises:
        ValueError: If value is a string that is not an ISO date.
    """
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    return date.fromisoformat(value.strip())
