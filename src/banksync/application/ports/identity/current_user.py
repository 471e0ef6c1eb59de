"""CurrentUser - the pipeline's view of the authenticated user.

Authentication happens outside this package; callers (CLI, HTTP handler,
scheduled job) build this from whatever identity system they use.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class CurrentUser:
    """Immutable representation of the user a sync runs for."""

    user_id: Optional[UUID]
    email: Optional[str] = None

    def __str__(self) -> str:
        return f"CurrentUser({self.email or self.user_id})"
