"""Bank account entity with its sync state machine."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from banksync.domain.banking.value_objects import AccountBalance
from banksync.domain.integration.value_objects import SyncStatus, SyncType
from banksync.domain.shared.exceptions import BusinessRuleViolation, ErrorCode
from banksync.domain.shared.time import utc_now

DEFAULT_BALANCE_TYPE = "closingBooked"


class BankAccount:
    """
    A bank account connected through the aggregator.

    Identity is the aggregator's account id (``external_id``), which is
    unique across all users and never changes once set. The internal ``id``
    is assigned by storage and is ``None`` until the account is saved.

    Sync state transitions:
    - ``start_sync``: ``IN_PROGRESS``, error cleared
    - ``complete_sync``: ``SUCCESS``, balance updated, timestamps set, error
      cleared
    - ``fail_sync``: ``ERROR`` with a message; ``last_sync_at`` still moves
      so the staleness check does not retry-storm a broken account
    """

    def __init__(  # noqa: PLR0913
        self,
        user_id: UUID,
        external_id: str,
        name: str,
        currency: str,
        iban: Optional[str] = None,
        balance: Optional[Decimal] = None,
        balance_type: str = DEFAULT_BALANCE_TYPE,
        sync_status: SyncStatus = SyncStatus.NEVER,
        last_sync_at: Optional[datetime] = None,
        last_success_at: Optional[datetime] = None,
        sync_error_message: Optional[str] = None,
        requisition_id: Optional[str] = None,
        institution_id: Optional[str] = None,
        # For reconstitution from persistence:
        id: Optional[int] = None,
    ):
        if not external_id or not external_id.strip():
            msg = "External account id cannot be empty"
            raise ValueError(msg)

        self._id = id
        self._user_id = user_id
        self._external_id = external_id.strip()
        self._name = name
        self._currency = currency
        self._iban = iban
        self._balance = balance
        self._balance_type = balance_type
        self._sync_status = sync_status
        self._last_sync_at = last_sync_at
        self._last_success_at = last_success_at
        self._sync_error_message = sync_error_message
        self._requisition_id = requisition_id
        self._institution_id = institution_id

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def external_id(self) -> str:
        return self._external_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def iban(self) -> Optional[str]:
        return self._iban

    @property
    def balance(self) -> Optional[Decimal]:
        return self._balance

    @property
    def balance_type(self) -> str:
        return self._balance_type

    @property
    def sync_status(self) -> SyncStatus:
        return self._sync_status

    @property
    def last_sync_at(self) -> Optional[datetime]:
        return self._last_sync_at

    @property
    def last_success_at(self) -> Optional[datetime]:
        return self._last_success_at

    @property
    def sync_error_message(self) -> Optional[str]:
        return self._sync_error_message

    @property
    def requisition_id(self) -> Optional[str]:
        return self._requisition_id

    @property
    def institution_id(self) -> Optional[str]:
        return self._institution_id

    def assign_id(self, account_id: int) -> None:
        if self._id is not None and self._id != account_id:
            msg = "Account id is already assigned"
            raise ValueError(msg)
        self._id = account_id

    def next_sync_type(self) -> SyncType:
        if self._last_success_at is None:
            return SyncType.INITIAL
        return SyncType.INCREMENTAL

    def start_sync(self) -> None:
        self._sync_status = SyncStatus.IN_PROGRESS
        self._sync_error_message = None

    def complete_sync(
        self,
        balance: Optional[AccountBalance],
        completed_at: Optional[datetime] = None,
    ) -> None:
        self._ensure_in_progress()
        completed_at = completed_at or utc_now()

        if balance is None:
            self._balance = Decimal("0")
            self._balance_type = DEFAULT_BALANCE_TYPE
        else:
            self._balance = balance.amount
            self._balance_type = balance.balance_type

        self._sync_status = SyncStatus.SUCCESS
        self._sync_error_message = None
        self._last_sync_at = completed_at
        self._last_success_at = completed_at

    def fail_sync(
        self,
        error_message: str,
        failed_at: Optional[datetime] = None,
    ) -> None:
        if not error_message or not error_message.strip():
            msg = "Error message cannot be empty"
            raise ValueError(msg)

        self._sync_status = SyncStatus.ERROR
        self._sync_error_message = error_message.strip()
        self._last_sync_at = failed_at or utc_now()

    def _ensure_in_progress(self) -> None:
        if not self._sync_status.can_finish():
            msg = "Account sync must be started before it can complete"
            raise BusinessRuleViolation(
                msg,
                code=ErrorCode.INVALID_STATE_TRANSITION,
                details={
                    "external_id": self._external_id,
                    "status": self._sync_status.value,
                },
            )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        user_id: UUID,
        external_id: str,
        name: str,
        currency: str,
        iban: Optional[str],
        balance: Optional[Decimal],
        balance_type: str,
        sync_status: SyncStatus,
        last_sync_at: Optional[datetime],
        last_success_at: Optional[datetime],
        sync_error_message: Optional[str],
        requisition_id: Optional[str],
        institution_id: Optional[str],
    ) -> "BankAccount":
        return cls(
            user_id=user_id,
            external_id=external_id,
            name=name,
            currency=currency,
            iban=iban,
            balance=balance,
            balance_type=balance_type,
            sync_status=sync_status,
            last_sync_at=last_sync_at,
            last_success_at=last_success_at,
            sync_error_message=sync_error_message,
            requisition_id=requisition_id,
            institution_id=institution_id,
            id=id,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BankAccount):
            return False
        return self._external_id == other._external_id

    def __hash__(self) -> int:
        return hash(self._external_id)

    def __str__(self) -> str:
        return f"BankAccount[{self._sync_status.value}]: {self._name} ({self._external_id})"
