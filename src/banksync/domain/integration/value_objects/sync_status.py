"""Account sync status enumeration."""

from enum import Enum


class SyncStatus(Enum):
    """Sync state of a bank account.

    ``NEVER`` -> ``IN_PROGRESS`` -> ``SUCCESS`` | ``ERROR``; both terminal
    states re-enter ``IN_PROGRESS`` on the next attempt.
    """

    NEVER = "never"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    ERROR = "error"

    def is_terminal(self) -> bool:
        return self in [SyncStatus.SUCCESS, SyncStatus.ERROR]

    def can_finish(self) -> bool:
        return self == SyncStatus.IN_PROGRESS

    def needs_attention(self) -> bool:
        """States that by themselves call for a new sync."""
        return self in [SyncStatus.NEVER, SyncStatus.ERROR]
