"""Command-line interface."""

from banksync.presentation.cli.app import app, cli

__all__ = ["app", "cli"]
