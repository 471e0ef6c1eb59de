"""Account balance value object."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class AccountBalance(BaseModel):
    """One balance entry reported by the aggregator.

    PSD2 banks report several balances per account (``closingBooked``,
    ``expected``, ``interimAvailable``...); the pipeline keeps the first one.
    """

    amount: Decimal = Field(..., description="Signed balance amount")
    balance_type: str = Field(..., min_length=1, max_length=50)
    currency: Optional[str] = Field(default=None, max_length=3)
    reference_date: Optional[date] = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return str(value)

    @classmethod
    def from_api(cls, entry: dict[str, Any]) -> "AccountBalance":
        balance_amount = entry.get("balanceAmount") or {}
        return cls(
            amount=balance_amount.get("amount", "0"),
            currency=balance_amount.get("currency"),
            balance_type=entry.get("balanceType") or "closingBooked",
            reference_date=entry.get("referenceDate"),
        )
