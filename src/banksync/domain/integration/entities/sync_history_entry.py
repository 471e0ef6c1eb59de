"""Sync history entry entity for the append-only sync audit trail."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from banksync.domain.integration.value_objects import HistoryStatus, SyncType
from banksync.domain.shared.exceptions import BusinessRuleViolation, ErrorCode
from banksync.domain.shared.time import utc_now


class SyncHistoryEntry:
    """
    One recorded sync attempt for one bank account.

    Purpose:
    - Audit trail of every attempt (who, which account, when, outcome)
    - Leaves a permanent ``in_progress`` record if the process dies mid-sync
    - Feeds the "recent history" part of the sync status

    The only allowed mutation is the single transition from
    ``in_progress`` to a final status, which also sets ``completed_at``.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_id: UUID,
        account_id: int,
        sync_type: SyncType,
        status: HistoryStatus = HistoryStatus.IN_PROGRESS,
        transactions_fetched: int = 0,
        transactions_new: int = 0,
        error_message: Optional[str] = None,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        started_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._user_id = user_id
        self._account_id = account_id
        self._sync_type = sync_type
        self._status = status
        self._transactions_fetched = transactions_fetched
        self._transactions_new = transactions_new
        self._error_message = error_message
        self._started_at = started_at or utc_now()
        self._completed_at = completed_at

        self._validate()

    @classmethod
    def begin(
        cls,
        user_id: UUID,
        account_id: int,
        sync_type: SyncType,
        started_at: Optional[datetime] = None,
    ) -> "SyncHistoryEntry":
        return cls(
            user_id=user_id,
            account_id=account_id,
            sync_type=sync_type,
            started_at=started_at,
        )

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def account_id(self) -> int:
        return self._account_id

    @property
    def sync_type(self) -> SyncType:
        return self._sync_type

    @property
    def status(self) -> HistoryStatus:
        return self._status

    @property
    def transactions_fetched(self) -> int:
        return self._transactions_fetched

    @property
    def transactions_new(self) -> int:
        return self._transactions_new

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    def _validate(self) -> None:
        if self._transactions_fetched < 0 or self._transactions_new < 0:
            msg = "Transaction counts cannot be negative"
            raise ValueError(msg)

        if self._status.is_final() and self._completed_at is None:
            msg = "Finished sync history entry must have a completion time"
            raise ValueError(msg)

    def complete(
        self,
        status: HistoryStatus,
        transactions_fetched: int = 0,
        transactions_new: int = 0,
        error_message: Optional[str] = None,
        completed_at: Optional[datetime] = None,
    ) -> None:
        if self._status.is_final():
            msg = "Sync history entry is already completed"
            raise BusinessRuleViolation(
                msg,
                code=ErrorCode.INVALID_STATE_TRANSITION,
                details={"entry_id": str(self._id), "status": self._status.value},
            )
        if not status.is_final():
            msg = "A sync history entry can only be completed with a final status"
            raise BusinessRuleViolation(
                msg,
                code=ErrorCode.INVALID_STATE_TRANSITION,
                details={"entry_id": str(self._id), "status": status.value},
            )
        if transactions_fetched < 0 or transactions_new < 0:
            msg = "Transaction counts cannot be negative"
            raise ValueError(msg)

        self._status = status
        self._transactions_fetched = transactions_fetched
        self._transactions_new = transactions_new
        self._error_message = error_message if status == HistoryStatus.ERROR else None
        self._completed_at = completed_at or utc_now()

    def is_in_progress(self) -> bool:
        return self._status == HistoryStatus.IN_PROGRESS

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        user_id: UUID,
        account_id: int,
        sync_type: SyncType,
        status: HistoryStatus,
        transactions_fetched: int,
        transactions_new: int,
        error_message: Optional[str],
        started_at: datetime,
        completed_at: Optional[datetime],
    ) -> "SyncHistoryEntry":
        return cls(
            user_id=user_id,
            account_id=account_id,
            sync_type=sync_type,
            status=status,
            transactions_fetched=transactions_fetched,
            transactions_new=transactions_new,
            error_message=error_message,
            id=id,
            started_at=started_at,
            completed_at=completed_at,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, SyncHistoryEntry):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return (
            f"SyncHistoryEntry[{self._sync_type.value}/{self._status.value}]: "
            f"account {self._account_id}"
        )
