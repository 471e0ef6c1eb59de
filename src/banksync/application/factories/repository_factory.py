"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from banksync.domain.banking.repositories import (
    BankAccountRepository,
    BankTransactionRepository,
)
from banksync.domain.integration.repositories import SyncHistoryRepository

if TYPE_CHECKING:
    from banksync.application.ports.identity import CurrentUser


class RepositoryFactory(Protocol):
    """Protocol for creating user-scoped repositories."""

    @property
    def current_user(self) -> CurrentUser:
        """Get the current user for repository scoping."""
        ...

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        Commands use it to commit after each sync checkpoint.
        """
        ...

    def bank_account_repository(self) -> BankAccountRepository:
        """Get bank account repository."""
        ...

    def bank_transaction_repository(self) -> BankTransactionRepository:
        """Get bank transaction repository."""
        ...

    def sync_history_repository(self) -> SyncHistoryRepository:
        """Get sync history repository."""
        ...
