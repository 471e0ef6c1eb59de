"""Sync history entry status enumeration."""

from enum import Enum


class HistoryStatus(Enum):
    """Outcome of a single recorded sync attempt."""

    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    ERROR = "error"

    def is_final(self) -> bool:
        return self in [HistoryStatus.SUCCESS, HistoryStatus.ERROR]
