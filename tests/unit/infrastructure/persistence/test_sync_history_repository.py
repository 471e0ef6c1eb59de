"""Unit tests for SyncHistoryRepositorySQLAlchemy."""

from datetime import datetime, timedelta, timezone

import pytest

from banksync.domain.integration.entities import SyncHistoryEntry
from banksync.domain.integration.value_objects import HistoryStatus, SyncType
from banksync.infrastructure.persistence.sqlalchemy.repositories import (
    BankAccountRepositorySQLAlchemy,
    SyncHistoryRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import TestUserFactory, make_account

STARTED_AT = datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
async def account(db_session, current_user):
    repo = BankAccountRepositorySQLAlchemy(db_session, current_user)
    return await repo.save(make_account())


def _entry(account_id: int, minutes: int = 0) -> SyncHistoryEntry:
    return SyncHistoryEntry.begin(
        user_id=TestUserFactory.DEFAULT_ID,
        account_id=account_id,
        sync_type=SyncType.INITIAL,
        started_at=STARTED_AT + timedelta(minutes=minutes),
    )


class TestSyncHistoryRepositorySQLAlchemy:
    """Test suite for the sync history repository."""

    @pytest.mark.asyncio
    async def test_save_and_complete(self, db_session, current_user, account):
        # Arrange
        repo = SyncHistoryRepositorySQLAlchemy(db_session, current_user)
        entry = _entry(account.id)
        await repo.save(entry)

        # Act
        entry.complete(
            HistoryStatus.ERROR,
            transactions_fetched=2,
            error_message="Rate limit exceeded",
        )
        await repo.save(entry)

        # Assert
        found = await repo.find_by_id(entry.id)
        assert found.status == HistoryStatus.ERROR
        assert found.transactions_fetched == 2
        assert found.error_message == "Rate limit exceeded"
        assert found.started_at == STARTED_AT
        assert found.completed_at is not None

    @pytest.mark.asyncio
    async def test_in_progress_entry_round_trips(self, db_session, current_user, account):
        repo = SyncHistoryRepositorySQLAlchemy(db_session, current_user)
        entry = _entry(account.id)
        await repo.save(entry)

        found = await repo.find_by_id(entry.id)

        assert found.is_in_progress()
        assert found.sync_type == SyncType.INITIAL
        assert found.completed_at is None

    @pytest.mark.asyncio
    async def test_find_recent_newest_first(self, db_session, current_user, account):
        repo = SyncHistoryRepositorySQLAlchemy(db_session, current_user)
        entries = [_entry(account.id, minutes=m) for m in (0, 10, 20)]
        for entry in entries:
            await repo.save(entry)

        recent = await repo.find_recent(limit=2)

        assert [e.id for e in recent] == [entries[2].id, entries[1].id]
        assert len(await repo.find_by_account(account.id)) == 3

    @pytest.mark.asyncio
    async def test_other_users_cannot_see_entries(
        self,
        db_session,
        current_user,
        other_user,
        account,
    ):
        repo = SyncHistoryRepositorySQLAlchemy(db_session, current_user)
        entry = _entry(account.id)
        await repo.save(entry)

        other_repo = SyncHistoryRepositorySQLAlchemy(db_session, other_user)

        assert await other_repo.find_by_id(entry.id) is None
        assert await other_repo.find_recent() == []
