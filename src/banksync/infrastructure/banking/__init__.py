"""Aggregator adapters."""

from banksync.infrastructure.banking.gocardless_client import GoCardlessClient
from banksync.infrastructure.banking.gocardless_config import AggregatorConfig

__all__ = ["AggregatorConfig", "GoCardlessClient"]
