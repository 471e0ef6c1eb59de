"""Append-only record of sync attempts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from banksync.domain.integration.entities import SyncHistoryEntry
from banksync.domain.integration.exceptions import SyncHistoryEntryNotFoundError
from banksync.domain.integration.value_objects import HistoryStatus, SyncType

if TYPE_CHECKING:
    from banksync.domain.integration.repositories import SyncHistoryRepository


class SyncHistoryLedger:
    """Begin and complete sync history entries for one user."""

    def __init__(self, history_repository: SyncHistoryRepository, user_id: UUID):
        self._history_repo = history_repository
        self._user_id = user_id

    async def begin(self, account_id: int, sync_type: SyncType) -> UUID:
        entry = SyncHistoryEntry.begin(
            user_id=self._user_id,
            account_id=account_id,
            sync_type=sync_type,
        )
        await self._history_repo.save(entry)
        return entry.id

    async def complete(  # noqa: PLR0913
        self,
        entry_id: UUID,
        status: HistoryStatus,
        transactions_fetched: int = 0,
        transactions_new: int = 0,
        error_message: Optional[str] = None,
    ) -> SyncHistoryEntry:
        entry = await self._history_repo.find_by_id(entry_id)
        if entry is None:
            raise SyncHistoryEntryNotFoundError(entry_id)

        entry.complete(
            status=status,
            transactions_fetched=transactions_fetched,
            transactions_new=transactions_new,
            error_message=error_message,
        )
        await self._history_repo.save(entry)
        return entry

    async def recent(self, limit: int = 5) -> list[SyncHistoryEntry]:
        return await self._history_repo.find_recent(limit)
