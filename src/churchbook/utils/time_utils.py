"""UTC time helpers.

Timestamps are stored as naive UTC datetimes. Aware datetimes are converted
to UTC and stripped of tzinfo before they reach the database.
"""

from datetime import datetime, UTC
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """Normalize a datetime to naive UTC. Naive input is assumed to be UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime to ISO-8601 with a trailing 'Z'."""
    if dt is None:
        return None
    return to_naive_utc(dt).isoformat() + "Z"
