"""DTO for batch sync command result."""

from dataclasses import dataclass, field
from datetime import datetime

from banksync.application.dtos.integration.account_sync_result import (
    AccountSyncResult,
)


@dataclass
class BatchSyncResult:
    """Result of syncing all accounts of one user."""

    synced_at: datetime
    total_accounts: int = 0

    # Per-account outcomes, in processing order
    results: list[AccountSyncResult] = field(default_factory=list)

    @property
    def has_accounts(self) -> bool:
        return self.total_accounts > 0

    @property
    def accounts_updated(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def accounts_failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def new_transactions(self) -> int:
        return sum(r.transactions_new for r in self.results if r.succeeded)

    @property
    def total_fetched(self) -> int:
        return sum(r.transactions_fetched for r in self.results if r.succeeded)

    @property
    def errors(self) -> list[str]:
        return [
            f"{r.account_name}: {r.error_message}"
            for r in self.results
            if not r.succeeded
        ]

    def add_result(self, result: AccountSyncResult) -> None:
        self.results.append(result)

    def to_dict(self) -> dict:
        return {
            "synced_at": self.synced_at.isoformat(),
            "stats": {
                "accounts_updated": self.accounts_updated,
                "total_accounts": self.total_accounts,
                "new_transactions": self.new_transactions,
            },
            "results": [r.to_dict() for r in self.results],
        }
