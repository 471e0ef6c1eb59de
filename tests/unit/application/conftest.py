"""Fixtures for application layer tests.

Repositories are AsyncMocks with just enough behavior (save returns the
entity, history entries can be found again) for the commands to run their
real services on top.
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from banksync.application.commands.integration import AccountSyncCommand
from banksync.application.services import (
    AccountSyncStateMachine,
    SyncHistoryLedger,
    SyncPacer,
    TransactionReconciler,
)
from banksync.domain.banking.repositories import StoredBankTransaction
from tests.shared.fixtures.factories import (
    TestUserFactory,
    account_details,
    balance,
)

TODAY = date(2024, 3, 15)


@pytest.fixture
def session():
    return AsyncMock()


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def pacer(sleep):
    return SyncPacer(call_delay=1.0, account_delay=2.0, sleep=sleep)


@pytest.fixture
def aggregator():
    mock = AsyncMock()
    mock.get_account_details.side_effect = lambda account_id: account_details(
        account_id,
    )
    mock.get_account_balances.return_value = [balance("1234.56")]
    mock.get_account_transactions.return_value = []
    return mock


@pytest.fixture
def account_repo():
    repo = AsyncMock()
    next_id = iter(range(100, 1000))

    async def save(account):
        if account.id is None:
            account.assign_id(next(next_id))
        return account

    repo.save.side_effect = save
    repo.find_by_id.return_value = None
    repo.find_by_external_id.return_value = None
    repo.find_all.return_value = []
    return repo


@pytest.fixture
def history_entries():
    """Entries saved through the history repository, keyed by id."""
    return {}


@pytest.fixture
def history_repo(history_entries):
    repo = AsyncMock()

    async def save(entry):
        history_entries[entry.id] = entry
        return entry

    async def find_by_id(entry_id):
        return history_entries.get(entry_id)

    repo.save.side_effect = save
    repo.find_by_id.side_effect = find_by_id
    return repo


@pytest.fixture
def transaction_repo():
    """Stores every transaction as new unless it was stored before."""
    repo = AsyncMock()
    seen: set[str] = set()

    async def save_batch(transactions):
        stored = []
        for t in transactions:
            is_new = t.external_id not in seen
            seen.add(t.external_id)
            stored.append(
                StoredBankTransaction(
                    id=uuid4() if is_new else None,
                    transaction=t,
                    is_new=is_new,
                ),
            )
        return stored

    repo.save_batch_ignore_duplicates.side_effect = save_batch
    return repo


@pytest.fixture
def sync_command(
    aggregator,
    account_repo,
    history_repo,
    transaction_repo,
    session,
    pacer,
):
    return AccountSyncCommand(
        aggregator=aggregator,
        account_repository=account_repo,
        state_machine=AccountSyncStateMachine(account_repo),
        ledger=SyncHistoryLedger(history_repo, TestUserFactory.DEFAULT_ID),
        reconciler=TransactionReconciler(transaction_repo),
        session=session,
        pacer=pacer,
        today=lambda: TODAY,
    )
