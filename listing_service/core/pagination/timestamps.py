"""UTC timestamp helpers shared by the cursor codec, parser and meta builder."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MICROSECOND = timedelta(microseconds=1)

# Python keeps microseconds; RFC 3339 producers may send nanoseconds.
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def ensure_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 / RFC 3339 instant into an aware UTC datetime.

    Args:
        raw: Timestamp string, e.g. ``2025-01-15T10:30:00.123456789Z``.

    Returns:
        Aware datetime in UTC.

    Raises:
        ValueError: If the string is not an absolute timestamp.
    """
    text = raw.strip()
    if not text or "T" not in text.upper():
        msg = f"not an ISO-8601 timestamp: {raw!r}"
        raise ValueError(msg)
    text = _EXCESS_FRACTION.sub(r"\1", text)
    return ensure_utc(datetime.fromisoformat(text))


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as RFC 3339 UTC with microseconds and a ``Z`` suffix."""
    return ensure_utc(value).isoformat(timespec="microseconds").replace("+00:00", "Z")


def to_epoch_micros(value: datetime) -> int:
    """Exact integer microseconds since the Unix epoch."""
    return (ensure_utc(value) - EPOCH) // _ONE_MICROSECOND


def from_epoch_micros(value: int) -> datetime:
    """Inverse of :func:`to_epoch_micros`.

    Raises:
        OverflowError: If the value is outside the datetime range.
    """
    return EPOCH + timedelta(microseconds=value)


__all__ = [
    "EPOCH",
    "ensure_utc",
    "format_timestamp",
    "from_epoch_micros",
    "parse_timestamp",
    "to_epoch_micros",
]
