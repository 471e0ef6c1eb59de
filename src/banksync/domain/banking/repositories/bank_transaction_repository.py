"""Repository interface for bank transactions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from banksync.domain.banking.value_objects import BankTransaction


@dataclass
class StoredBankTransaction:
    """A bank transaction record as stored in the database.

    Returned by save operations so callers can tell which records were
    inserted and which were already known.
    """

    id: Optional[UUID]
    transaction: BankTransaction
    is_new: bool


class BankTransactionRepository(ABC):
    """Repository for persisting bank transactions."""

    @abstractmethod
    async def save_batch_ignore_duplicates(
        self,
        transactions: list[BankTransaction],
    ) -> list[StoredBankTransaction]:
        """
        Insert a batch, silently skipping records that already exist.

        Deduplication is global on ``external_id``: a record whose id is
        already stored (for any account) is not written again and existing
        rows are never modified. Repeated ids inside the batch are stored
        once.

        Parameters
        ----------
        transactions
            Canonical transactions to store

        Returns
        -------
        One StoredBankTransaction per input record, ``is_new`` set for the
        ones actually inserted
        """

    @abstractmethod
    async def find_by_external_id(
        self,
        external_id: str,
    ) -> Optional[BankTransaction]:
        """
        Find a transaction by the aggregator's transaction id.

        Parameters
        ----------
        external_id
            Aggregator transaction id

        Returns
        -------
        Bank transaction if found, None otherwise
        """

    @abstractmethod
    async def find_by_account(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[BankTransaction]:
        """
        Find all transactions for an account within date range.

        Parameters
        ----------
        account_id
            Internal id of the account
        start_date
            Start date for filtering (inclusive)
        end_date
            End date for filtering (inclusive)

        Returns
        -------
        List of bank transactions ordered by date
        """

    @abstractmethod
    async def count_by_account(self, account_id: int) -> int:
        """
        Count transactions for an account.

        Parameters
        ----------
        account_id
            Internal id of the account

        Returns
        -------
        Number of transactions
        """
