"""Banking repository implementations."""

from banksync.infrastructure.persistence.sqlalchemy.repositories.banking.bank_account_repository import (  # NOQA: E501
    BankAccountRepositorySQLAlchemy,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories.banking.bank_transaction_repository import (  # NOQA: E501
    BankTransactionRepositorySQLAlchemy,
)

__all__ = [
    "BankAccountRepositorySQLAlchemy",
    "BankTransactionRepositorySQLAlchemy",
]
