from __future__ import annotations

from datetime import datetime, timezone

__all__ = [
    "utc_now",
    "as_utc",
    "days_between",
]

SECONDS_PER_DAY = 86400.0

def utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)

def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are assumed to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def days_between(earlier: datetime, later: datetime) -> float:
    """Elapsed days from earlier to later, never negative."""
    delta = (as_utc(later) - as_utc(earlier)).total_seconds() / SECONDS_PER_DAY
    return max(0.0, delta)
