"""Ports the application layer needs from its callers."""

from banksync.application.ports.identity import CurrentUser

__all__ = ["CurrentUser"]
