"""Repository interfaces for integration domain."""

from banksync.domain.integration.repositories.sync_history_repository import (
    SyncHistoryRepository,
)

__all__ = ["SyncHistoryRepository"]
