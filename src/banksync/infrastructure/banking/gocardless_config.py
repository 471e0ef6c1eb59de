"""Connection settings for the GoCardless Bank Account Data API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from banksync_config import Settings

DEFAULT_BASE_URL = "https://bankaccountdata.gocardless.com/api/v2"


@dataclass(frozen=True)
class AggregatorConfig:
    """Everything the client needs to talk to the aggregator.

    Built explicitly by the caller and injected, so tests can hand the
    client a config without touching the environment.
    """

    secret_id: str = field(repr=False)
    secret_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    user_language: Optional[str] = "DA"
    # Fallback lifetime when the token response carries none
    token_ttl_seconds: int = 50 * 60

    def __post_init__(self) -> None:
        if not self.secret_id or not self.secret_key:
            msg = "Aggregator secret id and secret key are required"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "Aggregator timeout must be positive"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: Settings) -> AggregatorConfig:
        return cls(
            secret_id=settings.gocardless_secret_id.get_secret_value(),
            secret_key=settings.gocardless_secret_key.get_secret_value(),
            base_url=settings.gocardless_base_url,
            timeout=settings.gocardless_timeout,
            user_language=settings.gocardless_user_language,
        )
