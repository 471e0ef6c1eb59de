"""Application layer services."""

from banksync.application.services.account_sync_state_machine import (
    AccountSyncStateMachine,
)
from banksync.application.services.sync_history_ledger import SyncHistoryLedger
from banksync.application.services.sync_pacer import SyncPacer
from banksync.application.services.transaction_reconciler import (
    ReconciliationOutcome,
    TransactionReconciler,
)

__all__ = [
    "AccountSyncStateMachine",
    "ReconciliationOutcome",
    "SyncHistoryLedger",
    "SyncPacer",
    "TransactionReconciler",
]
