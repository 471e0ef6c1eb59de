"""Banking commands."""

from banksync.application.commands.banking.bank_connection_command import (
    BankConnectionCommand,
)
from banksync.application.commands.banking.link_accounts_command import (
    LinkAccountsCommand,
)

__all__ = ["BankConnectionCommand", "LinkAccountsCommand"]
