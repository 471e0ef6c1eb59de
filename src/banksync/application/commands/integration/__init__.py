"""Integration commands."""

from banksync.application.commands.integration.account_sync_command import (
    AccountSyncCommand,
)
from banksync.application.commands.integration.batch_sync_command import (
    BatchSyncCommand,
)

__all__ = ["AccountSyncCommand", "BatchSyncCommand"]
