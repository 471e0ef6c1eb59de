"""Repository interface for bank accounts."""

from abc import ABC, abstractmethod
from typing import Optional

from banksync.domain.banking.entities import BankAccount


class BankAccountRepository(ABC):
    """Repository for the current user's connected bank accounts."""

    @abstractmethod
    async def save(self, account: BankAccount) -> BankAccount:
        """
        Insert or update a bank account.

        New accounts get their internal id assigned during save.

        Parameters
        ----------
        account
            Account to save

        Returns
        -------
        The saved account with ``id`` set
        """

    @abstractmethod
    async def find_all(self) -> list[BankAccount]:
        """
        Return all accounts of the current user, ordered by id.

        Returns
        -------
        List of bank accounts (empty if none are connected)
        """

    @abstractmethod
    async def find_by_id(self, account_id: int) -> Optional[BankAccount]:
        """
        Find an account by its internal id.

        Parameters
        ----------
        account_id
            Internal account id

        Returns
        -------
        Bank account if found and owned by the current user, None otherwise
        """

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[BankAccount]:
        """
        Find an account by the aggregator's account id.

        Parameters
        ----------
        external_id
            Aggregator account id

        Returns
        -------
        Bank account if found and owned by the current user, None otherwise
        """
