"""DTOs for the sync status query."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class OverallSyncStatus(Enum):
    """Summary status across all of a user's accounts."""

    NO_ACCOUNTS = "no_accounts"
    IN_PROGRESS = "in_progress"
    ERROR = "error"
    NEVER = "never"
    SUCCESS = "success"


@dataclass(frozen=True)
class AccountSyncStatusDTO:
    """Sync state of one account."""

    account_id: int
    external_id: str
    name: str
    sync_status: str
    last_sync_at: Optional[datetime]
    error_message: Optional[str]
    balance: Optional[Decimal]
    currency: str

    def to_dict(self) -> dict:
        return {
            "account_id": self.account_id,
            "external_id": self.external_id,
            "name": self.name,
            "sync_status": self.sync_status,
            "last_sync_at": self.last_sync_at.isoformat() if self.last_sync_at else None,
            "error_message": self.error_message,
            "balance": str(self.balance) if self.balance is not None else None,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class SyncHistoryDTO:
    """One recent sync attempt."""

    id: UUID
    account_id: int
    sync_type: str
    status: str
    transactions_fetched: int
    transactions_new: int
    started_at: datetime
    completed_at: Optional[datetime]
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "account_id": self.account_id,
            "sync_type": self.sync_type,
            "status": self.status,
            "transactions_fetched": self.transactions_fetched,
            "transactions_new": self.transactions_new,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "error_message": self.error_message,
        }


@dataclass(frozen=True)
class SyncStats:
    """Account counts per sync status."""

    total_accounts: int = 0
    successful_syncs: int = 0
    error_syncs: int = 0
    never_synced: int = 0
    in_progress: int = 0

    def to_dict(self) -> dict:
        return {
            "total_accounts": self.total_accounts,
            "successful_syncs": self.successful_syncs,
            "error_syncs": self.error_syncs,
            "never_synced": self.never_synced,
            "in_progress": self.in_progress,
        }


@dataclass(frozen=True)
class SyncStatusResult:
    """Result of sync status query."""

    overall_status: OverallSyncStatus
    last_sync_at: Optional[datetime]
    needs_sync: bool
    accounts: list[AccountSyncStatusDTO] = field(default_factory=list)
    recent_history: list[SyncHistoryDTO] = field(default_factory=list)
    stats: SyncStats = field(default_factory=SyncStats)

    def to_dict(self) -> dict:
        return {
            "overall_status": self.overall_status.value,
            "last_sync_at": self.last_sync_at.isoformat() if self.last_sync_at else None,
            "needs_sync": self.needs_sync,
            "accounts": [a.to_dict() for a in self.accounts],
            "recent_history": [h.to_dict() for h in self.recent_history],
            "stats": self.stats.to_dict(),
        }
