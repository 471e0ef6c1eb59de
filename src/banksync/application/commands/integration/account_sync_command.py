"""Sync one bank account: status, history, fetch, reconcile."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from banksync.application.dtos.integration import AccountSyncResult
from banksync.application.services import (
    AccountSyncStateMachine,
    SyncHistoryLedger,
    SyncPacer,
    TransactionReconciler,
)
from banksync.domain.integration.value_objects import (
    DEFAULT_BACKFILL_DAYS,
    DEFAULT_OVERLAP_DAYS,
    HistoryStatus,
    SyncType,
    compute_sync_window,
)
from banksync.domain.shared.exceptions import DomainException, ErrorCode
from banksync.domain.shared.time import today_utc, utc_now

if TYPE_CHECKING:
    from banksync.application.factories import RepositoryFactory
    from banksync.domain.banking.entities import BankAccount
    from banksync.domain.banking.ports import AggregatorPort
    from banksync.domain.banking.repositories import BankAccountRepository

logger = logging.getLogger(__name__)


class AccountSyncCommand:
    """Run the sync pipeline for a single account with isolated failure.

    Checkpoints are committed in order so a crash leaves a truthful trail:
    1. account marked ``in_progress``
    2. history entry begun
    3. balance, new transactions and history completion together

    Any exception is turned into an ``error`` result; the account and (when
    begun) its history entry record the failure.
    """

    def __init__(  # noqa: PLR0913
        self,
        aggregator: AggregatorPort,
        account_repository: BankAccountRepository,
        state_machine: AccountSyncStateMachine,
        ledger: SyncHistoryLedger,
        reconciler: TransactionReconciler,
        session: Any,
        pacer: Optional[SyncPacer] = None,
        backfill_days: int = DEFAULT_BACKFILL_DAYS,
        overlap_days: int = DEFAULT_OVERLAP_DAYS,
        today: Callable[[], date] = today_utc,
    ):
        self._aggregator = aggregator
        self._account_repo = account_repository
        self._state = state_machine
        self._ledger = ledger
        self._reconciler = reconciler
        self._session = session
        self._pacer = pacer or SyncPacer()
        self._backfill_days = backfill_days
        self._overlap_days = overlap_days
        self._today = today

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        aggregator: AggregatorPort,
        pacer: Optional[SyncPacer] = None,
        backfill_days: int = DEFAULT_BACKFILL_DAYS,
        overlap_days: int = DEFAULT_OVERLAP_DAYS,
    ) -> AccountSyncCommand:
        account_repo = factory.bank_account_repository()
        user_id: UUID = factory.current_user.user_id  # type: ignore[assignment]
        return cls(
            aggregator=aggregator,
            account_repository=account_repo,
            state_machine=AccountSyncStateMachine(account_repo),
            ledger=SyncHistoryLedger(factory.sync_history_repository(), user_id),
            reconciler=TransactionReconciler(factory.bank_transaction_repository()),
            session=factory.session,
            pacer=pacer,
            backfill_days=backfill_days,
            overlap_days=overlap_days,
        )

    @property
    def pacer(self) -> SyncPacer:
        return self._pacer

    async def execute(
        self,
        account: BankAccount,
        sync_type: Optional[SyncType] = None,
    ) -> AccountSyncResult:
        sync_type = sync_type or account.next_sync_type()
        account_name = account.name

        try:
            await self._state.start(account)
            await self._session.commit()
            entry_id = await self._ledger.begin(account.id, sync_type)  # type: ignore[arg-type]
            await self._session.commit()
        except Exception as e:
            logger.warning(
                "Could not start sync for account %s: %s",
                account.external_id,
                e,
            )
            await self._session.rollback()
            return await self._fail(account, sync_type, e, entry_id=None)

        try:
            return await self._run(account, sync_type, entry_id)
        except Exception as e:
            logger.warning(
                "Sync failed for account %s (%s): %s",
                account.external_id,
                account_name,
                e,
            )
            await self._session.rollback()
            return await self._fail(account, sync_type, e, entry_id=entry_id)

    async def _run(
        self,
        account: BankAccount,
        sync_type: SyncType,
        entry_id: UUID,
    ) -> AccountSyncResult:
        window = compute_sync_window(
            account.last_success_at,
            today=self._today(),
            backfill_days=self._backfill_days,
            overlap_days=self._overlap_days,
        )
        logger.info(
            "Syncing account %s (%s) from %s to %s",
            account.external_id,
            sync_type.value,
            window.start_date,
            window.end_date,
        )

        # Details double as a consent check before the heavier calls
        await self._aggregator.get_account_details(account.external_id)
        await self._pacer.after_call()

        balances = await self._aggregator.get_account_balances(account.external_id)
        await self._pacer.after_call()

        records = await self._aggregator.get_account_transactions(
            account.external_id,
            date_from=window.start_date,
            date_to=window.end_date,
        )
        await self._pacer.after_call()

        outcome = await self._reconciler.reconcile(account.id, records)  # type: ignore[arg-type]

        completed_at = utc_now()
        await self._state.succeed(
            account,
            balances[0] if balances else None,
            completed_at=completed_at,
        )
        await self._ledger.complete(
            entry_id,
            status=HistoryStatus.SUCCESS,
            transactions_fetched=outcome.fetched,
            transactions_new=outcome.new,
        )
        await self._session.commit()

        return AccountSyncResult.success(
            external_id=account.external_id,
            account_name=account.name,
            synced_at=completed_at,
            sync_type=sync_type,
            account_id=account.id,
            transactions_fetched=outcome.fetched,
            transactions_new=outcome.new,
            transactions_skipped=outcome.skipped,
            balance=account.balance,
            balance_type=account.balance_type,
            window_start=window.start_date,
            window_end=window.end_date,
        )

    async def _fail(
        self,
        account: BankAccount,
        sync_type: SyncType,
        error: Exception,
        entry_id: Optional[UUID],
    ) -> AccountSyncResult:
        message = _error_message(error)
        failed_at = utc_now()

        try:
            # Rollback discarded the in-memory view's pending writes; start
            # from what storage holds.
            stored = await self._account_repo.find_by_id(account.id)  # type: ignore[arg-type]
            target = stored or account
            await self._state.fail(target, message, failed_at=failed_at)
            if entry_id is not None:
                await self._ledger.complete(
                    entry_id,
                    status=HistoryStatus.ERROR,
                    error_message=message,
                )
            await self._session.commit()
        except Exception:
            logger.exception(
                "Could not record sync failure for account %s",
                account.external_id,
            )
            await self._session.rollback()

        return AccountSyncResult.failure(
            external_id=account.external_id,
            account_name=account.name,
            synced_at=failed_at,
            sync_type=sync_type,
            error_message=message,
            account_id=account.id,
            error_code=_error_code(error),
        )


def _error_message(error: Exception) -> str:
    message = str(error).strip()
    return message or error.__class__.__name__


def _error_code(error: Exception) -> str:
    if isinstance(error, DomainException):
        return error.code.value
    return ErrorCode.SYNC_FAILED.value
