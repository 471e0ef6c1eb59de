"""Integration DTOs. Data transfer objects for sync results and status."""

from banksync.application.dtos.integration.account_sync_result import (
    AccountSyncResult,
)
from banksync.application.dtos.integration.batch_sync_result import (
    BatchSyncResult,
)
from banksync.application.dtos.integration.sync_status_result import (
    AccountSyncStatusDTO,
    OverallSyncStatus,
    SyncHistoryDTO,
    SyncStats,
    SyncStatusResult,
)

__all__ = [
    "AccountSyncResult",
    "AccountSyncStatusDTO",
    "BatchSyncResult",
    "OverallSyncStatus",
    "SyncHistoryDTO",
    "SyncStats",
    "SyncStatusResult",
]
