"""Integration domain exceptions."""

from uuid import UUID

from banksync.domain.shared.exceptions import EntityNotFoundError, ErrorCode


class SyncHistoryEntryNotFoundError(EntityNotFoundError):
    """Raised when a sync history entry cannot be found."""

    def __init__(self, entry_id: UUID) -> None:
        super().__init__(
            message=f"Sync history entry {entry_id} not found",
            code=ErrorCode.SYNC_HISTORY_NOT_FOUND,
            details={"entry_id": str(entry_id)},
        )
        self.entry_id = entry_id
