"""Sync type enumeration."""

from enum import Enum


class SyncType(Enum):
    """Kind of sync attempt recorded in the history ledger."""

    INITIAL = "initial"
    INCREMENTAL = "incremental"
