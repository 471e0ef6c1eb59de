"""Application commands (use cases that change state)."""
