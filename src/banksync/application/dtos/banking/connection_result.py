"""DTOs for the bank connection flow."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from banksync.application.dtos.integration import AccountSyncResult


@dataclass(frozen=True)
class ConnectionResult:
    """Result of starting a bank connection.

    The user must open ``link`` and authorize access at the bank before
    the accounts can be linked.
    """

    requisition_id: str
    institution_id: str
    reference: str
    link: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "requisition_id": self.requisition_id,
            "institution_id": self.institution_id,
            "reference": self.reference,
            "link": self.link,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class LinkAccountsResult:
    """Result of linking the accounts of an authorized requisition."""

    requisition_id: str
    linked_at: datetime
    results: list[AccountSyncResult] = field(default_factory=list)

    @property
    def accounts_count(self) -> int:
        return len(self.results)

    @property
    def accounts_synced(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    def to_dict(self) -> dict:
        return {
            "requisition_id": self.requisition_id,
            "linked_at": self.linked_at.isoformat(),
            "accounts_count": self.accounts_count,
            "accounts_synced": self.accounts_synced,
            "results": [r.to_dict() for r in self.results],
        }
