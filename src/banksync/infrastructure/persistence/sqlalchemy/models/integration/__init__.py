"""Integration domain SQLAlchemy models."""

from banksync.infrastructure.persistence.sqlalchemy.models.integration.sync_history_model import (  # NOQA: E501
    SyncHistoryModel,
)

__all__ = ["SyncHistoryModel"]
