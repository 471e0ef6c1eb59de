"""Entities for the banking domain."""

from banksync.domain.banking.entities.bank_account import (
    DEFAULT_BALANCE_TYPE,
    BankAccount,
)

__all__ = ["DEFAULT_BALANCE_TYPE", "BankAccount"]
