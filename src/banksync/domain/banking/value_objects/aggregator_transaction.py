"""Raw transaction record as delivered by the aggregator."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionAmount(BaseModel):
    """Nested ``transactionAmount`` object."""

    amount: Decimal
    currency: str = Field(..., max_length=3)

    model_config = ConfigDict(frozen=True)


class AggregatorTransaction(BaseModel):
    """A booked transaction in the aggregator's (Berlin Group) shape.

    Only the fields the pipeline consumes are modelled; everything else in
    the payload is ignored.
    """

    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    internal_transaction_id: Optional[str] = Field(
        default=None,
        alias="internalTransactionId",
    )
    booking_date: Optional[date] = Field(default=None, alias="bookingDate")
    value_date: Optional[date] = Field(default=None, alias="valueDate")
    transaction_amount: TransactionAmount = Field(..., alias="transactionAmount")
    creditor_name: Optional[str] = Field(default=None, alias="creditorName")
    debtor_name: Optional[str] = Field(default=None, alias="debtorName")
    remittance_information_unstructured: Optional[str] = Field(
        default=None,
        alias="remittanceInformationUnstructured",
    )
    merchant_category_code: Optional[str] = Field(
        default=None,
        alias="merchantCategoryCode",
    )
    proprietary_bank_transaction_code: Optional[str] = Field(
        default=None,
        alias="proprietaryBankTransactionCode",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def external_id(self) -> Optional[str]:
        return self.transaction_id or self.internal_transaction_id

    @property
    def effective_date(self) -> Optional[date]:
        return self.booking_date or self.value_date
