"""SQLAlchemy model for bank accounts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import DateTime, Numeric, String, Text, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banksync.domain.integration.value_objects import SyncStatus
from banksync.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from banksync.infrastructure.persistence.sqlalchemy.models.banking.bank_transaction_model import (  # NOQA: E501
        BankTransactionModel,
    )


class BankAccountModel(Base, TimestampMixin):
    """Database model for bank accounts.

    ``user_id`` is a plain column: users live in the identity system, which
    owns its own tables.
    """

    __tablename__ = "bank_accounts"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # User association
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    # Aggregator identification (unique across all users)
    external_account_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )
    requisition_id: Mapped[Optional[str]] = mapped_column(String(255))
    institution_id: Mapped[Optional[str]] = mapped_column(String(255))

    # Account details
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    iban: Mapped[Optional[str]] = mapped_column(String(34))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="DKK")

    # Balance information
    balance: Mapped[Optional[Decimal]] = mapped_column(Numeric(19, 4))
    balance_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="closingBooked",
    )

    # Sync tracking
    sync_status: Mapped[SyncStatus] = mapped_column(
        SQLEnum(
            SyncStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        nullable=False,
        default=SyncStatus.NEVER,
        index=True,
    )
    last_sync_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    last_success_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
    )
    sync_error_message: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    transactions: Mapped[list[BankTransactionModel]] = relationship(
        "BankTransactionModel",
        back_populates="account",
    )

    def __repr__(self) -> str:
        return (
            f"<BankAccountModel(id={self.id}, "
            f"external_id={self.external_account_id}, "
            f"status={self.sync_status.value})>"
        )
