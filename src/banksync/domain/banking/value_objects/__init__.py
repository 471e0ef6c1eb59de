"""Value objects for banking domain."""

from banksync.domain.banking.value_objects.account_balance import AccountBalance
from banksync.domain.banking.value_objects.account_details import AccountDetails
from banksync.domain.banking.value_objects.aggregator_transaction import (
    AggregatorTransaction,
    TransactionAmount,
)
from banksync.domain.banking.value_objects.bank_transaction import BankTransaction
from banksync.domain.banking.value_objects.institution import Institution
from banksync.domain.banking.value_objects.requisition import (
    Requisition,
    RequisitionStatus,
)

__all__ = [
    "AccountBalance",
    "AccountDetails",
    "AggregatorTransaction",
    "BankTransaction",
    "Institution",
    "Requisition",
    "RequisitionStatus",
    "TransactionAmount",
]
