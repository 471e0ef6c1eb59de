"""SQLAlchemy repository factory for creating user-scoped repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from banksync.infrastructure.persistence.sqlalchemy.repositories.banking import (
    BankAccountRepositorySQLAlchemy,
    BankTransactionRepositorySQLAlchemy,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories.integration import (
    SyncHistoryRepositorySQLAlchemy,
)

if TYPE_CHECKING:
    from banksync.application.ports.identity import CurrentUser


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._current_user = current_user

        # Cached instances (created on demand)
        self._bank_account_repo: BankAccountRepositorySQLAlchemy | None = None
        self._history_repo: SyncHistoryRepositorySQLAlchemy | None = None

    @property
    def current_user(self) -> CurrentUser:
        return self._current_user

    @property
    def session(self) -> AsyncSession:
        return self._session

    def bank_account_repository(self) -> BankAccountRepositorySQLAlchemy:
        if self._bank_account_repo is None:
            self._bank_account_repo = BankAccountRepositorySQLAlchemy(
                self._session,
                self._current_user,
            )
        return self._bank_account_repo

    def bank_transaction_repository(self) -> BankTransactionRepositorySQLAlchemy:
        return BankTransactionRepositorySQLAlchemy(self._session, self._current_user)

    def sync_history_repository(self) -> SyncHistoryRepositorySQLAlchemy:
        if self._history_repo is None:
            self._history_repo = SyncHistoryRepositorySQLAlchemy(
                self._session,
                self._current_user,
            )
        return self._history_repo
