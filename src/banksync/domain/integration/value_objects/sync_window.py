"""Incremental fetch window calculation."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from banksync.domain.shared.exceptions import ErrorCode, ValidationError

# First-sync backfill
DEFAULT_BACKFILL_DAYS = 90

# Overlap with the previous sync for late-settled transactions
DEFAULT_OVERLAP_DAYS = 1


@dataclass(frozen=True)
class SyncWindow:
    """Closed date range ``[start_date, end_date]`` to request."""

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            msg = "Sync window start must not be after its end"
            raise ValidationError(
                msg,
                code=ErrorCode.INVALID_DATE,
                details={
                    "start_date": self.start_date.isoformat(),
                    "end_date": self.end_date.isoformat(),
                },
            )

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    def start_iso(self) -> str:
        return self.start_date.isoformat()


def compute_sync_window(
    last_sync_at: Optional[datetime | date],
    today: date,
    backfill_days: int = DEFAULT_BACKFILL_DAYS,
    overlap_days: int = DEFAULT_OVERLAP_DAYS,
) -> SyncWindow:
    """Derive the date range to request for one account.

    No previous sync backfills ``backfill_days``; otherwise the window starts
    ``overlap_days`` before the previous sync date. The window always ends
    at ``today``.
    """
    if last_sync_at is None:
        start_date = today - timedelta(days=backfill_days)
    else:
        last_date = (
            last_sync_at.date() if isinstance(last_sync_at, datetime) else last_sync_at
        )
        start_date = last_date - timedelta(days=overlap_days)

    return SyncWindow(start_date=min(start_date, today), end_date=today)
