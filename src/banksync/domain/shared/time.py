"""Time utilities for the domain layer."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def today_utc() -> date:
    """Return current date in UTC."""
    return utc_now().date()


def ensure_tz_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Return ``dt`` as an aware datetime, assuming UTC for naive values.

    SQLite drops tzinfo on round-trip, so everything read back from storage
    passes through here.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def is_older_than(dt: datetime, age: timedelta, now: datetime) -> bool:
    """Check whether ``dt`` lies more than ``age`` before ``now``."""
    return ensure_tz_aware(dt) < ensure_tz_aware(now) - age
