"""Account details value object."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountDetails(BaseModel):
    """Descriptive data the aggregator holds about one bank account."""

    account_id: str = Field(..., min_length=1, description="Aggregator account id")
    name: Optional[str] = Field(default=None, max_length=255)
    iban: Optional[str] = Field(default=None, max_length=34)
    currency: Optional[str] = Field(default=None, max_length=3)
    product: Optional[str] = Field(default=None, max_length=255)
    owner_name: Optional[str] = Field(default=None, max_length=255)
    cash_account_type: Optional[str] = Field(default=None, max_length=10)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @classmethod
    def from_api(cls, account_id: str, payload: dict[str, Any]) -> "AccountDetails":
        """Build from a ``GET /accounts/{id}/details/`` response body."""
        account = payload.get("account") or {}
        return cls(
            account_id=account_id,
            name=account.get("name"),
            iban=account.get("iban"),
            currency=account.get("currency"),
            product=account.get("product"),
            owner_name=account.get("ownerName"),
            cash_account_type=account.get("cashAccountType"),
        )

    def display_name(self, fallback: str = "Account") -> str:
        return self.name or self.product or fallback
