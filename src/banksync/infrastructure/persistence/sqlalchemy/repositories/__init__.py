"""SQLAlchemy repository implementations."""

from banksync.infrastructure.persistence.sqlalchemy.repositories.banking import (
    BankAccountRepositorySQLAlchemy,
    BankTransactionRepositorySQLAlchemy,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories.integration import (
    SyncHistoryRepositorySQLAlchemy,
)

__all__ = [
    "BankAccountRepositorySQLAlchemy",
    "BankTransactionRepositorySQLAlchemy",
    "SQLAlchemyRepositoryFactory",
    "SyncHistoryRepositorySQLAlchemy",
]
