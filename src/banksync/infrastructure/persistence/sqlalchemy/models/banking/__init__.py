"""Banking domain SQLAlchemy models."""

from banksync.infrastructure.persistence.sqlalchemy.models.banking.bank_account_model import (  # NOQA: E501
    BankAccountModel,
)
from banksync.infrastructure.persistence.sqlalchemy.models.banking.bank_transaction_model import (  # NOQA: E501
    BankTransactionModel,
)

__all__ = [
    "BankAccountModel",
    "BankTransactionModel",
]
