"""Repository interface for sync history entries."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from banksync.domain.integration.entities import SyncHistoryEntry


class SyncHistoryRepository(ABC):
    """Repository interface for the append-only sync audit trail."""

    @abstractmethod
    async def save(self, entry: SyncHistoryEntry) -> None:
        """
        Insert a new entry or update the status fields of an existing one.

        Parameters
        ----------
        entry
            Sync history entry to save
        """

    @abstractmethod
    async def find_by_id(self, entry_id: UUID) -> Optional[SyncHistoryEntry]:
        """
        Find a sync history entry by ID.

        Parameters
        ----------
        entry_id
            Entry ID to search for

        Returns
        -------
        Sync history entry if found, None otherwise
        """

    @abstractmethod
    async def find_recent(self, limit: int = 5) -> list[SyncHistoryEntry]:
        """
        Return the most recent entries of the current user.

        Parameters
        ----------
        limit
            Maximum number of entries

        Returns
        -------
        Entries ordered by ``started_at`` descending
        """

    @abstractmethod
    async def find_by_account(self, account_id: int) -> list[SyncHistoryEntry]:
        """
        Return all entries for one account, newest first.

        Parameters
        ----------
        account_id
            Internal id of the bank account

        Returns
        -------
        Entries ordered by ``started_at`` descending
        """
