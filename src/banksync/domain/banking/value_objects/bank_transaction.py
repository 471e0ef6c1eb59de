"""Canonical bank transaction value object."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class BankTransaction(BaseModel):
    """A transaction in the shape this system stores it.

    ``external_id`` is the aggregator's transaction id and the deduplication
    key: storage never holds two rows with the same value.
    """

    external_id: str = Field(..., min_length=1, max_length=255)
    account_id: int = Field(..., description="Internal id of the owning account")
    transaction_date: date
    amount: Decimal = Field(..., description="Signed amount, negative for debits")
    currency: str = Field(..., max_length=3)
    description: str = Field(..., min_length=1)

    counterparty_name: Optional[str] = Field(default=None, max_length=255)
    creditor_name: Optional[str] = Field(default=None, max_length=255)
    debtor_name: Optional[str] = Field(default=None, max_length=255)
    merchant_category_code: Optional[str] = Field(default=None, max_length=10)
    bank_transaction_code: Optional[str] = Field(default=None, max_length=100)

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return str(value)

    @field_serializer("transaction_date")
    def serialize_date(self, value: date) -> str:
        return value.isoformat()

    def is_credit(self) -> bool:
        return self.amount > 0

    def is_debit(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        direction = "+" if self.is_credit() else ""
        return (
            f"{self.transaction_date}: {direction}{self.amount} {self.currency} "
            f"- {self.description[:50]}"
        )
