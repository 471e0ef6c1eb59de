"""Banking bounded context: connected accounts and their transactions."""
