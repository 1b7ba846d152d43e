"""
UTC datetime utilities for consistent timezone handling.

All datetime values written by the service are timezone-aware UTC. Documents
created by older clients store ISO-8601 strings instead of Firestore
timestamps; as_datetime() normalizes both so they can be compared and sorted.
"""

from datetime import UTC, datetime
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() (naive, local timezone) or
    datetime.utcnow() (naive, deprecated).

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def as_datetime(value: Any) -> datetime:
    """
    Coerce a stored createdAt/updatedAt value to an aware datetime.

    Accepts datetimes, ISO-8601 strings (with or without a trailing Z) and
    millisecond epoch numbers. Anything missing or unparseable sorts as the
    Unix epoch so it lands last in newest-first listings.

    Args:
        value: Raw value read from a Firestore document

    Returns:
        UTC-aware datetime
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str) and value:
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return _EPOCH
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    return _EPOCH
