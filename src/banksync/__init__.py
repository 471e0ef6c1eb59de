"""banksync - bank account synchronization pipeline for PSD2 aggregators."""

__version__ = "0.1.0"
