"""Integration repository implementations."""

from banksync.infrastructure.persistence.sqlalchemy.repositories.integration.sync_history_repository import (  # NOQA: E501
    SyncHistoryRepositorySQLAlchemy,
)

__all__ = ["SyncHistoryRepositorySQLAlchemy"]
