"""SQLAlchemy model for SyncHistoryEntry entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    Uuid,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from banksync.domain.integration.value_objects import HistoryStatus, SyncType
from banksync.infrastructure.persistence.sqlalchemy.models.base import Base


class SyncHistoryModel(Base):
    """
    SQLAlchemy model for persisting SyncHistoryEntry entities.

    Append-only: rows are inserted when a sync starts and updated exactly
    once when it finishes.

    Database Constraints:
    - If status != 'in_progress', completed_at must not be NULL
    - Transaction counts are non-negative
    """

    __tablename__ = "sync_history"

    __table_args__ = (
        CheckConstraint(
            "(status = 'in_progress' OR completed_at IS NOT NULL)",
            name="check_finished_has_completed_at",
        ),
        CheckConstraint(
            "transactions_fetched >= 0 AND transactions_new >= 0",
            name="check_non_negative_counts",
        ),
        Index("ix_sync_history_user_started", "user_id", "started_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"),
        nullable=False,
        index=True,
    )

    sync_type: Mapped[SyncType] = mapped_column(
        SQLEnum(
            SyncType,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        nullable=False,
    )
    status: Mapped[HistoryStatus] = mapped_column(
        SQLEnum(
            HistoryStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        nullable=False,
        default=HistoryStatus.IN_PROGRESS,
    )

    transactions_fetched: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    transactions_new: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<SyncHistoryModel(id={self.id}, "
            f"account={self.account_id}, "
            f"status={self.status.value})>"
        )
