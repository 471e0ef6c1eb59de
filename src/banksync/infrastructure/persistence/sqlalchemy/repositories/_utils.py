"""Shared utilities for SQLAlchemy repositories."""

from uuid import UUID


def ensure_uuid(value: UUID | str | None) -> UUID | None:
    """
    Ensure a value is a UUID, converting from string if necessary.

    User ids arrive from callers (CLI options, HTTP handlers) either as
    UUID objects or as their string form.
    """
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    msg = f"Expected UUID or str, got {type(value).__name__}"
    raise TypeError(msg)
