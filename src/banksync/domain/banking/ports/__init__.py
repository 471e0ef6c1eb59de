"""Port interfaces for banking operations.

These interfaces define what the domain needs from the PSD2 aggregator.
Implementations (adapters) are provided in the infrastructure layer.
"""

from banksync.domain.banking.ports.aggregator_port import AggregatorPort

__all__ = [
    "AggregatorPort",
]
