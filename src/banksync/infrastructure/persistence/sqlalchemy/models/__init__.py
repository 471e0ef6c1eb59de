"""SQLAlchemy models for persistence layer."""

from banksync.infrastructure.persistence.sqlalchemy.models.banking import (
    BankAccountModel,
    BankTransactionModel,
)
from banksync.infrastructure.persistence.sqlalchemy.models.base import Base
from banksync.infrastructure.persistence.sqlalchemy.models.integration import (
    SyncHistoryModel,
)

__all__ = [
    "Base",
    "BankAccountModel",
    "BankTransactionModel",
    "SyncHistoryModel",
]
