"""DTO for the outcome of syncing one bank account."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from banksync.domain.integration.value_objects import HistoryStatus, SyncType


@dataclass(frozen=True)
class AccountSyncResult:
    """Tagged outcome of one account sync.

    ``status`` is either ``success`` (counts and balance are set) or
    ``error`` (``error_message`` is set). Failures never escape an account
    as exceptions; they arrive here as data.
    """

    status: HistoryStatus
    external_id: str
    account_name: str
    synced_at: datetime
    sync_type: SyncType
    account_id: Optional[int] = None
    transactions_fetched: int = 0
    transactions_new: int = 0
    transactions_skipped: int = 0
    balance: Optional[Decimal] = None
    balance_type: Optional[str] = None
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def success(  # noqa: PLR0913
        cls,
        external_id: str,
        account_name: str,
        synced_at: datetime,
        sync_type: SyncType,
        account_id: Optional[int],
        transactions_fetched: int,
        transactions_new: int,
        transactions_skipped: int = 0,
        balance: Optional[Decimal] = None,
        balance_type: Optional[str] = None,
        window_start: Optional[date] = None,
        window_end: Optional[date] = None,
    ) -> AccountSyncResult:
        return cls(
            status=HistoryStatus.SUCCESS,
            external_id=external_id,
            account_name=account_name,
            synced_at=synced_at,
            sync_type=sync_type,
            account_id=account_id,
            transactions_fetched=transactions_fetched,
            transactions_new=transactions_new,
            transactions_skipped=transactions_skipped,
            balance=balance,
            balance_type=balance_type,
            window_start=window_start,
            window_end=window_end,
        )

    @classmethod
    def failure(  # noqa: PLR0913
        cls,
        external_id: str,
        account_name: str,
        synced_at: datetime,
        sync_type: SyncType,
        error_message: str,
        account_id: Optional[int] = None,
        error_code: Optional[str] = None,
    ) -> AccountSyncResult:
        return cls(
            status=HistoryStatus.ERROR,
            external_id=external_id,
            account_name=account_name,
            synced_at=synced_at,
            sync_type=sync_type,
            account_id=account_id,
            error_message=error_message,
            error_code=error_code,
        )

    @property
    def succeeded(self) -> bool:
        return self.status == HistoryStatus.SUCCESS

    def to_dict(self) -> dict:
        data: dict = {
            "status": self.status.value,
            "account_id": self.account_id,
            "external_id": self.external_id,
            "account_name": self.account_name,
            "sync_type": self.sync_type.value,
            "synced_at": self.synced_at.isoformat(),
        }
        if self.succeeded:
            data.update(
                {
                    "transactions_fetched": self.transactions_fetched,
                    "transactions_new": self.transactions_new,
                    "transactions_skipped": self.transactions_skipped,
                    "balance": str(self.balance) if self.balance is not None else None,
                    "balance_type": self.balance_type,
                    "window_start": (
                        self.window_start.isoformat() if self.window_start else None
                    ),
                    "window_end": (
                        self.window_end.isoformat() if self.window_end else None
                    ),
                },
            )
        else:
            data["error_message"] = self.error_message
            data["error_code"] = self.error_code
        return data
