"""Tests for the AccountSyncCommand."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from banksync.domain.banking.exceptions import (
    AggregatorAuthenticationError,
    AggregatorRateLimitError,
)
from banksync.domain.integration.value_objects import (
    HistoryStatus,
    SyncStatus,
    SyncType,
)
from tests.shared.fixtures.factories import make_account, raw_transactions


@pytest.fixture
def account():
    account = make_account()
    account.assign_id(1)
    return account


class TestAccountSyncSuccess:
    """Test a full successful account sync."""

    @pytest.mark.asyncio
    async def test_first_sync_stores_transactions_and_balance(
        self,
        sync_command,
        aggregator,
        account,
        history_entries,
        session,
    ):
        # Arrange
        aggregator.get_account_transactions.return_value = raw_transactions(5)

        # Act
        result = await sync_command.execute(account)

        # Assert
        assert result.succeeded
        assert result.sync_type == SyncType.INITIAL
        assert result.transactions_fetched == 5
        assert result.transactions_new == 5
        assert result.balance == Decimal("1234.56")
        assert result.balance_type == "closingBooked"
        assert account.sync_status == SyncStatus.SUCCESS
        assert account.last_success_at is not None

        (entry,) = history_entries.values()
        assert entry.status == HistoryStatus.SUCCESS
        assert entry.transactions_fetched == 5
        assert entry.transactions_new == 5
        assert session.commit.await_count == 3
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_sync_backfills_ninety_days(
        self,
        sync_command,
        aggregator,
        account,
    ):
        result = await sync_command.execute(account)

        aggregator.get_account_transactions.assert_awaited_once_with(
            "acc-checking-1",
            date_from=date(2023, 12, 16),
            date_to=date(2024, 3, 15),
        )
        assert result.window_start == date(2023, 12, 16)
        assert result.window_end == date(2024, 3, 15)

    @pytest.mark.asyncio
    async def test_incremental_window_starts_day_before_last_success(
        self,
        sync_command,
        aggregator,
    ):
        account = make_account(
            id=2,
            sync_status=SyncStatus.SUCCESS,
            last_success_at=datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc),
            last_sync_at=datetime(2024, 3, 12, 8, 0, tzinfo=timezone.utc),
        )

        result = await sync_command.execute(account)

        assert result.sync_type == SyncType.INCREMENTAL
        assert aggregator.get_account_transactions.await_args.kwargs[
            "date_from"
        ] == date(2024, 3, 9)

    @pytest.mark.asyncio
    async def test_repeat_sync_counts_no_new_transactions(
        self,
        sync_command,
        aggregator,
        account,
    ):
        aggregator.get_account_transactions.return_value = raw_transactions(3)

        first = await sync_command.execute(account)
        second = await sync_command.execute(account)

        assert first.transactions_new == 3
        assert second.transactions_fetched == 3
        assert second.transactions_new == 0

    @pytest.mark.asyncio
    async def test_missing_balance_stores_zero(
        self,
        sync_command,
        aggregator,
        account,
    ):
        aggregator.get_account_balances.return_value = []

        result = await sync_command.execute(account)

        assert result.succeeded
        assert result.balance == Decimal("0")
        assert account.balance_type == "closingBooked"

    @pytest.mark.asyncio
    async def test_waits_after_each_aggregator_call(
        self,
        sync_command,
        account,
        sleep,
    ):
        await sync_command.execute(account)

        assert sleep.await_count == 3
        sleep.assert_awaited_with(1.0)


class TestAccountSyncFailure:
    """Test that failures become error results and are recorded."""

    @pytest.mark.asyncio
    async def test_rate_limit_marks_account_and_history_failed(
        self,
        sync_command,
        aggregator,
        account,
        history_entries,
        session,
    ):
        # Arrange
        aggregator.get_account_transactions.side_effect = AggregatorRateLimitError(
            "Rate limit exceeded",
        )

        # Act
        result = await sync_command.execute(account)

        # Assert
        assert not result.succeeded
        assert result.error_message == "Rate limit exceeded"
        assert result.error_code == "AGGREGATOR_RATE_LIMITED"
        assert account.sync_status == SyncStatus.ERROR
        assert account.sync_error_message == "Rate limit exceeded"
        assert account.last_success_at is None

        (entry,) = history_entries.values()
        assert entry.status == HistoryStatus.ERROR
        assert entry.error_message == "Rate limit exceeded"
        session.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_failure_reloads_account_from_storage(
        self,
        sync_command,
        aggregator,
        account_repo,
        account,
    ):
        stored = make_account(id=1)
        account_repo.find_by_id.return_value = stored
        aggregator.get_account_details.side_effect = AggregatorAuthenticationError(
            "Consent expired",
        )

        result = await sync_command.execute(account)

        assert result.error_code == "AGGREGATOR_AUTHENTICATION_FAILED"
        account_repo.find_by_id.assert_awaited_with(1)
        assert stored.sync_status == SyncStatus.ERROR
        assert stored.sync_error_message == "Consent expired"

    @pytest.mark.asyncio
    async def test_unexpected_error_uses_class_name(
        self,
        sync_command,
        aggregator,
        account,
    ):
        aggregator.get_account_balances.side_effect = RuntimeError()

        result = await sync_command.execute(account)

        assert result.error_message == "RuntimeError"
        assert result.error_code == "SYNC_FAILED"

    @pytest.mark.asyncio
    async def test_start_failure_writes_no_history(
        self,
        sync_command,
        account_repo,
        account,
        history_entries,
        aggregator,
    ):
        original_save = account_repo.save.side_effect
        calls = {"n": 0}

        async def flaky_save(acc):
            calls["n"] += 1
            if calls["n"] == 1:
                msg = "database is locked"
                raise RuntimeError(msg)
            return await original_save(acc)

        account_repo.save.side_effect = flaky_save

        result = await sync_command.execute(account)

        assert not result.succeeded
        assert result.error_message == "database is locked"
        assert history_entries == {}
        aggregator.get_account_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_while_recording_failure_is_contained(
        self,
        sync_command,
        aggregator,
        account,
        session,
    ):
        aggregator.get_account_details.side_effect = AggregatorRateLimitError()
        session.commit.side_effect = [None, None, RuntimeError("connection lost")]

        result = await sync_command.execute(account)

        assert not result.succeeded
        assert result.error_message == "Aggregator rate limit exceeded"
        assert session.rollback.await_count == 2
