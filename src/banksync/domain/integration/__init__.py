"""Integration bounded context: sync state, windows and history."""
