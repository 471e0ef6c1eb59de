"""Entities for the integration domain."""

from banksync.domain.integration.entities.sync_history_entry import SyncHistoryEntry

__all__ = ["SyncHistoryEntry"]
