"""Banking DTOs."""

from banksync.application.dtos.banking.connection_result import (
    ConnectionResult,
    LinkAccountsResult,
)

__all__ = ["ConnectionResult", "LinkAccountsResult"]
