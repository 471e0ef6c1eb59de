"""Repository interfaces for banking domain."""

from banksync.domain.banking.repositories.bank_account_repository import (
    BankAccountRepository,
)
from banksync.domain.banking.repositories.bank_transaction_repository import (
    BankTransactionRepository,
    StoredBankTransaction,
)

__all__ = [
    "BankAccountRepository",
    "BankTransactionRepository",
    "StoredBankTransaction",
]
