"""Integration queries."""

from banksync.application.queries.integration.sync_status_query import (
    SyncStatusQuery,
)

__all__ = ["SyncStatusQuery"]
