"""Timezone-aware UTC timestamp utilities.

All backend code should use these helpers instead of datetime.utcnow()
or datetime.now(). Timestamps are stored as ISO 8601 strings with a
+00:00 offset and serialized to clients in the millisecond "Z" form
that browser Date parsing expects (2025-01-01T00:00:00.000Z).
"""

from datetime import date, datetime, time, timezone
from typing import Optional


def now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def isonow() -> str:
    """Return the current UTC time as an ISO 8601 string with +00:00 offset."""
    return now().isoformat(timespec="microseconds")


def parse_timestamp(iso_str: str) -> datetime:
    """Parse an ISO timestamp, assuming UTC if no timezone info.

    Accepts a trailing "Z" and bare calendar dates (midnight UTC).
    Raises ValueError for anything else, including instants that fall
    outside the representable range once converted to UTC.
    """
    value = iso_str.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        dt = datetime.combine(date.fromisoformat(value), time.min)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError(f"Timestamp out of range: {iso_str!r}")


def to_wire(iso_str: Optional[str]) -> Optional[str]:
    """Format a stored timestamp for JSON responses, or None if unset."""
    if not iso_str:
        return None
    dt = parse_timestamp(iso_str)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
