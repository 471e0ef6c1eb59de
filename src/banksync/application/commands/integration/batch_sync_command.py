"""Sync all bank accounts of the current user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from banksync.application.commands.integration.account_sync_command import (
    AccountSyncCommand,
)
from banksync.application.dtos.integration import BatchSyncResult
from banksync.domain.shared.exceptions import ValidationError
from banksync.domain.shared.time import utc_now

if TYPE_CHECKING:
    from banksync.application.factories import RepositoryFactory
    from banksync.application.services import SyncPacer
    from banksync.domain.banking.ports import AggregatorPort
    from banksync.domain.banking.repositories import BankAccountRepository

logger = logging.getLogger(__name__)


class BatchSyncCommand:
    """Orchestrate sequential account syncs and aggregate results.

    Accounts are processed one at a time with the pacer's inter-account
    wait. A failing account never stops the batch; only loading the
    account list can raise.
    """

    def __init__(
        self,
        sync_command: AccountSyncCommand,
        account_repository: BankAccountRepository,
        user_id: Optional[UUID],
    ):
        self._sync_command = sync_command
        self._account_repo = account_repository
        self._user_id = user_id

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        aggregator: AggregatorPort,
        pacer: Optional[SyncPacer] = None,
        **window_options: int,
    ) -> BatchSyncCommand:
        return cls(
            sync_command=AccountSyncCommand.from_factory(
                factory,
                aggregator,
                pacer=pacer,
                **window_options,
            ),
            account_repository=factory.bank_account_repository(),
            user_id=factory.current_user.user_id,
        )

    async def execute(self) -> BatchSyncResult:
        if self._user_id is None:
            msg = "A user id is required to sync accounts"
            raise ValidationError(msg)

        result = BatchSyncResult(synced_at=utc_now())

        accounts = await self._account_repo.find_all()
        result.total_accounts = len(accounts)
        if not accounts:
            logger.info("No bank accounts to sync for user %s", self._user_id)
            return result

        logger.info("Syncing %d accounts for user %s", len(accounts), self._user_id)
        for index, account in enumerate(accounts):
            await self._sync_command.pacer.before_account(index)
            result.add_result(await self._sync_command.execute(account))

        logger.info(
            "Sync finished: %d/%d accounts updated, %d new transactions",
            result.accounts_updated,
            result.total_accounts,
            result.new_transactions,
        )
        return result
