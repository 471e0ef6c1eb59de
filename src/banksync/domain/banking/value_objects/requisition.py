"""Requisition (consent) value object."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequisitionStatus(str, Enum):
    """Aggregator-side lifecycle of a consent request."""

    CREATED = "CR"
    GIVING_CONSENT = "GC"
    UNDERGOING_AUTHENTICATION = "UA"
    REJECTED = "RJ"
    SELECTING_ACCOUNTS = "SA"
    GRANTING_ACCESS = "GA"
    LINKED = "LN"
    EXPIRED = "EX"
    UNKNOWN = "??"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RequisitionStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Requisition(BaseModel):
    """A user's consent request for one institution."""

    id: str = Field(..., min_length=1)
    status: RequisitionStatus = RequisitionStatus.CREATED
    raw_status: Optional[str] = None
    institution_id: Optional[str] = None
    reference: Optional[str] = None
    link: Optional[str] = None
    accounts: tuple[str, ...] = ()
    created: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Requisition":
        raw_status = payload.get("status")
        return cls(
            id=payload["id"],
            status=RequisitionStatus.parse(raw_status or "CR"),
            raw_status=raw_status,
            institution_id=payload.get("institution_id"),
            reference=payload.get("reference"),
            link=payload.get("link"),
            accounts=tuple(payload.get("accounts") or ()),
            created=payload.get("created"),
        )

    @property
    def is_linked(self) -> bool:
        return self.status == RequisitionStatus.LINKED
