"""Start the consent flow for a bank."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from banksync.application.dtos.banking import ConnectionResult
from banksync.domain.shared.exceptions import ValidationError
from banksync.domain.shared.time import utc_now

if TYPE_CHECKING:
    from banksync.domain.banking.ports import AggregatorPort

logger = logging.getLogger(__name__)


class BankConnectionCommand:
    """Create a requisition and hand back the bank's authorization link.

    The reference (``<prefix>-<epoch millis>``) lets the link step find the
    requisition again from the redirect callback alone.
    """

    def __init__(
        self,
        aggregator: AggregatorPort,
        redirect_url: str,
        reference_prefix: str = "banksync",
        user_language: Optional[str] = None,
    ):
        self._aggregator = aggregator
        self._redirect_url = redirect_url
        self._reference_prefix = reference_prefix
        self._user_language = user_language

    async def execute(self, institution_id: str) -> ConnectionResult:
        if not institution_id or not institution_id.strip():
            msg = "Institution id is required"
            raise ValidationError(msg)

        created_at = utc_now()
        reference = build_reference(self._reference_prefix, created_at.timestamp())

        requisition = await self._aggregator.create_requisition(
            institution_id=institution_id.strip(),
            redirect_url=self._redirect_url,
            reference=reference,
            user_language=self._user_language,
        )
        logger.info(
            "Created requisition %s for institution %s",
            requisition.id,
            institution_id,
        )

        return ConnectionResult(
            requisition_id=requisition.id,
            institution_id=institution_id.strip(),
            reference=reference,
            link=requisition.link,
            created_at=created_at,
        )


def build_reference(prefix: str, timestamp: float) -> str:
    return f"{prefix}-{int(timestamp * 1000)}"
