"""Persisted sync status transitions of bank accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from banksync.domain.banking.entities import BankAccount
    from banksync.domain.banking.repositories import BankAccountRepository
    from banksync.domain.banking.value_objects import AccountBalance


class AccountSyncStateMachine:
    """Apply a transition on the account and write it to storage.

    Committing is left to the caller so each transition can be made durable
    before the next external call.
    """

    def __init__(self, bank_account_repository: BankAccountRepository):
        self._account_repo = bank_account_repository

    async def start(self, account: BankAccount) -> BankAccount:
        account.start_sync()
        return await self._account_repo.save(account)

    async def succeed(
        self,
        account: BankAccount,
        balance: Optional[AccountBalance],
        completed_at: Optional[datetime] = None,
    ) -> BankAccount:
        account.complete_sync(balance, completed_at=completed_at)
        return await self._account_repo.save(account)

    async def fail(
        self,
        account: BankAccount,
        error_message: str,
        failed_at: Optional[datetime] = None,
    ) -> BankAccount:
        account.fail_sync(error_message, failed_at=failed_at)
        return await self._account_repo.save(account)
