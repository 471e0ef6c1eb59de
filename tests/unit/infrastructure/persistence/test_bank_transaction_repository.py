"""
Unit tests for BankTransactionRepositorySQLAlchemy.

Covers deduplication on the aggregator's transaction id:
1. Re-saving the same batch inserts nothing
2. Duplicates inside one batch are stored once
3. Ids stored for another account are never inserted again
"""

from datetime import date
from decimal import Decimal

import pytest

from banksync.domain.banking.exceptions import BankAccountNotFoundError
from banksync.domain.banking.value_objects import BankTransaction
from banksync.infrastructure.persistence.sqlalchemy.repositories import (
    BankAccountRepositorySQLAlchemy,
    BankTransactionRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import TestUserFactory, make_account


def create_test_transaction(account_id: int, **overrides) -> BankTransaction:
    """Create a test transaction with default values."""
    defaults = {
        "external_id": "tx-1",
        "account_id": account_id,
        "transaction_date": date(2024, 3, 1),
        "amount": Decimal("-50.00"),
        "currency": "DKK",
        "description": "Netto",
    }
    defaults.update(overrides)
    return BankTransaction(**defaults)


@pytest.fixture
async def account(db_session, current_user):
    repo = BankAccountRepositorySQLAlchemy(db_session, current_user)
    return await repo.save(make_account())


class TestBankTransactionRepositorySQLAlchemy:
    """Test suite for bank transaction repository."""

    @pytest.mark.asyncio
    async def test_save_batch_marks_new(self, db_session, current_user, account):
        # Arrange
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        transactions = [
            create_test_transaction(account.id, external_id=f"tx-{i}")
            for i in range(3)
        ]

        # Act
        stored = await repo.save_batch_ignore_duplicates(transactions)

        # Assert
        assert [s.is_new for s in stored] == [True, True, True]
        assert all(s.id is not None for s in stored)
        assert await repo.count_by_account(account.id) == 3

    @pytest.mark.asyncio
    async def test_resave_inserts_nothing(self, db_session, current_user, account):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        transactions = [
            create_test_transaction(account.id, external_id=f"tx-{i}")
            for i in range(3)
        ]
        first = await repo.save_batch_ignore_duplicates(transactions)

        second = await repo.save_batch_ignore_duplicates(transactions)

        assert not any(s.is_new for s in second)
        assert [s.id for s in second] == [s.id for s in first]
        assert await repo.count_by_account(account.id) == 3

    @pytest.mark.asyncio
    async def test_duplicates_within_batch_stored_once(
        self,
        db_session,
        current_user,
        account,
    ):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        tx = create_test_transaction(account.id)

        stored = await repo.save_batch_ignore_duplicates([tx, tx])

        assert [s.is_new for s in stored] == [True, False]
        assert stored[0].id == stored[1].id
        assert await repo.count_by_account(account.id) == 1

    @pytest.mark.asyncio
    async def test_external_id_unique_across_accounts(
        self,
        db_session,
        current_user,
        account,
    ):
        account_repo = BankAccountRepositorySQLAlchemy(db_session, current_user)
        second = await account_repo.save(make_account(external_id="acc-savings"))
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        await repo.save_batch_ignore_duplicates([create_test_transaction(account.id)])

        stored = await repo.save_batch_ignore_duplicates(
            [create_test_transaction(second.id)],
        )

        assert stored[0].is_new is False
        assert await repo.count_by_account(second.id) == 0

    @pytest.mark.asyncio
    async def test_rejects_foreign_account(self, db_session, other_user, account):
        repo = BankTransactionRepositorySQLAlchemy(db_session, other_user)

        with pytest.raises(BankAccountNotFoundError):
            await repo.save_batch_ignore_duplicates(
                [create_test_transaction(account.id)],
            )

    @pytest.mark.asyncio
    async def test_find_by_account_with_date_range(
        self,
        db_session,
        current_user,
        account,
    ):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        await repo.save_batch_ignore_duplicates(
            [
                create_test_transaction(
                    account.id,
                    external_id="tx-feb",
                    transaction_date=date(2024, 2, 10),
                ),
                create_test_transaction(
                    account.id,
                    external_id="tx-mar",
                    transaction_date=date(2024, 3, 10),
                    counterparty_name="Netto",
                ),
            ],
        )

        march = await repo.find_by_account(
            account.id,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
        )
        everything = await repo.find_by_account(account.id)

        assert [t.external_id for t in march] == ["tx-mar"]
        assert march[0].amount == Decimal("-50.00")
        assert march[0].counterparty_name == "Netto"
        assert [t.external_id for t in everything] == ["tx-feb", "tx-mar"]

    @pytest.mark.asyncio
    async def test_three_decimal_amount_kept(self, db_session, current_user, account):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        await repo.save_batch_ignore_duplicates(
            [
                create_test_transaction(
                    account.id,
                    amount=Decimal("-12.345"),
                    currency="KWD",
                ),
            ],
        )

        (stored,) = await repo.find_by_account(account.id)

        assert stored.amount == Decimal("-12.345")

    @pytest.mark.asyncio
    async def test_find_by_external_id_is_user_scoped(
        self,
        db_session,
        current_user,
        account,
    ):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)
        await repo.save_batch_ignore_duplicates([create_test_transaction(account.id)])
        bob_repo = BankTransactionRepositorySQLAlchemy(
            db_session,
            TestUserFactory.bob_current_user(),
        )

        assert (await repo.find_by_external_id("tx-1")).description == "Netto"
        assert await bob_repo.find_by_external_id("tx-1") is None

    @pytest.mark.asyncio
    async def test_empty_batch(self, db_session, current_user):
        repo = BankTransactionRepositorySQLAlchemy(db_session, current_user)

        assert await repo.save_batch_ignore_duplicates([]) == []
