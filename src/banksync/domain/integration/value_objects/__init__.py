"""Value objects for the integration domain."""

from banksync.domain.integration.value_objects.history_status import HistoryStatus
from banksync.domain.integration.value_objects.sync_status import SyncStatus
from banksync.domain.integration.value_objects.sync_type import SyncType
from banksync.domain.integration.value_objects.sync_window import (
    DEFAULT_BACKFILL_DAYS,
    DEFAULT_OVERLAP_DAYS,
    SyncWindow,
    compute_sync_window,
)

__all__ = [
    "DEFAULT_BACKFILL_DAYS",
    "DEFAULT_OVERLAP_DAYS",
    "HistoryStatus",
    "SyncStatus",
    "SyncType",
    "SyncWindow",
    "compute_sync_window",
]
