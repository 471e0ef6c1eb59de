"""Sync status query. Summarize account sync state and recent history."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional
from uuid import UUID

from banksync.application.dtos.integration import (
    AccountSyncStatusDTO,
    OverallSyncStatus,
    SyncHistoryDTO,
    SyncStats,
    SyncStatusResult,
)
from banksync.application.services import SyncHistoryLedger
from banksync.domain.integration.value_objects import SyncStatus
from banksync.domain.shared.exceptions import ValidationError
from banksync.domain.shared.time import ensure_tz_aware, is_older_than, utc_now

if TYPE_CHECKING:
    from banksync.application.factories import RepositoryFactory
    from banksync.domain.banking.entities import BankAccount
    from banksync.domain.banking.repositories import BankAccountRepository
    from banksync.domain.integration.entities import SyncHistoryEntry
    from banksync.domain.integration.repositories import SyncHistoryRepository

DEFAULT_STALE_AFTER = timedelta(hours=6)
DEFAULT_HISTORY_LIMIT = 5


class SyncStatusQuery:
    """Query the current user's sync state. Never writes."""

    def __init__(  # noqa: PLR0913
        self,
        account_repository: BankAccountRepository,
        history_repository: SyncHistoryRepository,
        user_id: Optional[UUID],
        stale_after: timedelta = DEFAULT_STALE_AFTER,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        now: Callable[[], datetime] = utc_now,
    ):
        self._account_repo = account_repository
        self._ledger = SyncHistoryLedger(history_repository, user_id)  # type: ignore[arg-type]
        self._user_id = user_id
        self._stale_after = stale_after
        self._history_limit = history_limit
        self._now = now

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        stale_after: timedelta = DEFAULT_STALE_AFTER,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> SyncStatusQuery:
        return cls(
            account_repository=factory.bank_account_repository(),
            history_repository=factory.sync_history_repository(),
            user_id=factory.current_user.user_id,
            stale_after=stale_after,
            history_limit=history_limit,
        )

    async def execute(self) -> SyncStatusResult:
        if self._user_id is None:
            msg = "A user id is required to read the sync status"
            raise ValidationError(msg)

        accounts = await self._account_repo.find_all()
        if not accounts:
            return SyncStatusResult(
                overall_status=OverallSyncStatus.NO_ACCOUNTS,
                last_sync_at=None,
                needs_sync=False,
            )

        history = await self._ledger.recent(self._history_limit)
        statuses = {a.sync_status for a in accounts}
        last_sync_at = self._latest_sync(accounts)

        return SyncStatusResult(
            overall_status=self._overall_status(statuses),
            last_sync_at=last_sync_at,
            needs_sync=self._needs_sync(last_sync_at, statuses),
            accounts=[self._account_dto(a) for a in accounts],
            recent_history=[self._history_dto(e) for e in history],
            stats=self._stats(accounts),
        )

    @staticmethod
    def _overall_status(statuses: set[SyncStatus]) -> OverallSyncStatus:
        # Priority: in_progress > error > never > success
        if SyncStatus.IN_PROGRESS in statuses:
            return OverallSyncStatus.IN_PROGRESS
        if SyncStatus.ERROR in statuses:
            return OverallSyncStatus.ERROR
        if SyncStatus.NEVER in statuses:
            return OverallSyncStatus.NEVER
        return OverallSyncStatus.SUCCESS

    @staticmethod
    def _latest_sync(accounts: list[BankAccount]) -> Optional[datetime]:
        timestamps = [
            ensure_tz_aware(a.last_sync_at) for a in accounts if a.last_sync_at
        ]
        return max(timestamps) if timestamps else None  # type: ignore[type-var]

    def _needs_sync(
        self,
        last_sync_at: Optional[datetime],
        statuses: set[SyncStatus],
    ) -> bool:
        if last_sync_at is None:
            return True
        if is_older_than(last_sync_at, self._stale_after, self._now()):
            return True
        return any(status.needs_attention() for status in statuses)

    @staticmethod
    def _stats(accounts: list[BankAccount]) -> SyncStats:
        def count(status: SyncStatus) -> int:
            return sum(1 for a in accounts if a.sync_status == status)

        return SyncStats(
            total_accounts=len(accounts),
            successful_syncs=count(SyncStatus.SUCCESS),
            error_syncs=count(SyncStatus.ERROR),
            never_synced=count(SyncStatus.NEVER),
            in_progress=count(SyncStatus.IN_PROGRESS),
        )

    @staticmethod
    def _account_dto(account: BankAccount) -> AccountSyncStatusDTO:
        return AccountSyncStatusDTO(
            account_id=account.id,  # type: ignore[arg-type]
            external_id=account.external_id,
            name=account.name,
            sync_status=account.sync_status.value,
            last_sync_at=ensure_tz_aware(account.last_sync_at),
            error_message=account.sync_error_message,
            balance=account.balance,
            currency=account.currency,
        )

    @staticmethod
    def _history_dto(entry: SyncHistoryEntry) -> SyncHistoryDTO:
        return SyncHistoryDTO(
            id=entry.id,
            account_id=entry.account_id,
            sync_type=entry.sync_type.value,
            status=entry.status.value,
            transactions_fetched=entry.transactions_fetched,
            transactions_new=entry.transactions_new,
            started_at=entry.started_at,
            completed_at=entry.completed_at,
            error_message=entry.error_message,
        )
