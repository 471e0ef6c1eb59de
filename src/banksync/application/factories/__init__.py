"""Factories for the application layer."""

from banksync.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
