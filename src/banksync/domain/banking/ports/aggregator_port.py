"""Aggregator port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from banksync.domain.banking.value_objects import (
        AccountBalance,
        AccountDetails,
        Institution,
        Requisition,
    )


class AggregatorPort(ABC):
    """
    Interface for a PSD2 account-information aggregator.

    Every method raises ``AggregatorError`` (or a subclass) when the upstream
    call fails, carrying the HTTP status code and upstream message.
    """

    @abstractmethod
    async def get_institutions(self, country: str) -> list[Institution]:
        """
        List the banks available in a country.

        Parameters
        ----------
        country
            ISO 3166 two-letter country code

        Returns
        -------
        Institutions as reported by the aggregator
        """

    @abstractmethod
    async def create_requisition(
        self,
        institution_id: str,
        redirect_url: str,
        reference: str,
        user_language: Optional[str] = None,
    ) -> Requisition:
        """
        Start a consent flow for one institution.

        Parameters
        ----------
        institution_id
            Aggregator institution id
        redirect_url
            Where the bank sends the user after authorizing
        reference
            Caller-chosen unique reference for later lookup
        user_language
            Language of the bank's consent screens

        Returns
        -------
        The created requisition including the authorization ``link``
        """

    @abstractmethod
    async def get_requisition(self, requisition_id: str) -> Requisition:
        """
        Fetch a requisition by id.

        Parameters
        ----------
        requisition_id
            Aggregator requisition id

        Returns
        -------
        The requisition with its current status and account ids
        """

    @abstractmethod
    async def list_requisitions(self) -> list[Requisition]:
        """
        List all requisitions created with our secrets.

        Returns
        -------
        Requisitions in upstream order
        """

    @abstractmethod
    async def find_requisition_by_reference(
        self,
        reference: str,
    ) -> Optional[Requisition]:
        """
        Find a requisition by the reference it was created with.

        Parameters
        ----------
        reference
            Reference passed to ``create_requisition``

        Returns
        -------
        The matching requisition, None if none matches
        """

    @abstractmethod
    async def get_account_details(self, account_id: str) -> AccountDetails:
        """
        Fetch descriptive account data.

        Also serves as a consent check: fails when access has expired.
        """

    @abstractmethod
    async def get_account_balances(self, account_id: str) -> list[AccountBalance]:
        """
        Fetch all balances reported for an account.

        Returns
        -------
        Balances in upstream order, possibly empty
        """

    @abstractmethod
    async def get_account_transactions(
        self,
        account_id: str,
        date_from: date,
        date_to: Optional[date] = None,
    ) -> list[dict]:
        """
        Fetch booked transactions for an account within a date range.

        Parameters
        ----------
        account_id
            Aggregator account id
        date_from
            First booking date to include
        date_to
            Last booking date to include (upstream default when omitted)

        Returns
        -------
        Raw booked transaction records as delivered by the aggregator
        """

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
