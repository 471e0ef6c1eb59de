"""Institution value object."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Institution(BaseModel):
    """A bank reachable through the aggregator."""

    id: str = Field(..., min_length=1)
    name: str
    bic: Optional[str] = None
    transaction_total_days: Optional[int] = None
    countries: tuple[str, ...] = ()
    logo: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Institution":
        total_days = payload.get("transaction_total_days")
        return cls(
            id=payload["id"],
            name=payload.get("name", payload["id"]),
            bic=payload.get("bic"),
            transaction_total_days=int(total_days) if total_days else None,
            countries=tuple(payload.get("countries") or ()),
            logo=payload.get("logo"),
        )

    def matches(self, fragments: list[str]) -> bool:
        """Case-insensitive match of the name against any fragment."""
        name = self.name.lower()
        return any(fragment.lower() in name for fragment in fragments)
