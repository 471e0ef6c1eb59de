"""SQLAlchemy model for bank transactions."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banksync.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from banksync.infrastructure.persistence.sqlalchemy.models.banking.bank_account_model import (  # NOQA: E501
        BankAccountModel,
    )


class BankTransactionModel(Base, TimestampMixin):
    """Database model for bank transactions.

    Deduplication Strategy:
    - external_id: the aggregator's transaction id
    - Unique across the whole table, so a transaction is stored once and
      stays attributed to the account that first delivered it
    """

    __tablename__ = "bank_transactions"

    # Primary key (random UUID)
    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Foreign key to bank account
    account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"),
        nullable=False,
        index=True,
    )

    # Deduplication key
    external_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Aggregator transaction id",
    )

    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Amount and currency
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Counterparty information
    counterparty_name: Mapped[Optional[str]] = mapped_column(String(255))
    creditor_name: Mapped[Optional[str]] = mapped_column(String(255))
    debtor_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Transaction metadata
    merchant_category_code: Mapped[Optional[str]] = mapped_column(String(10))
    bank_transaction_code: Mapped[Optional[str]] = mapped_column(String(100))

    # Written by the categorization engine, never by the sync
    category: Mapped[Optional[str]] = mapped_column(String(100))

    # Relationship
    account: Mapped["BankAccountModel"] = relationship(
        "BankAccountModel",
        back_populates="transactions",
    )

    __table_args__ = (Index("idx_account_date", "account_id", "transaction_date"),)

    def __repr__(self) -> str:
        return (
            f"<BankTransactionModel(id={self.id}, "
            f"date={self.transaction_date}, amount={self.amount})>"
        )
