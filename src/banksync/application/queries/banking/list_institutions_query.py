"""List the banks available through the aggregator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from banksync.domain.shared.exceptions import ErrorCode, ValidationError

if TYPE_CHECKING:
    from banksync.domain.banking.ports import AggregatorPort
    from banksync.domain.banking.value_objects import Institution


class ListInstitutionsQuery:
    """Institutions for a country, optionally narrowed by name fragments."""

    def __init__(self, aggregator: AggregatorPort):
        self._aggregator = aggregator

    async def execute(
        self,
        country: str,
        name_filter: Optional[list[str]] = None,
    ) -> list[Institution]:
        country = (country or "").strip().upper()
        if len(country) != 2:  # noqa: PLR2004
            msg = f"Country must be a two-letter code, got '{country}'"
            raise ValidationError(msg, code=ErrorCode.INVALID_FORMAT)

        institutions = await self._aggregator.get_institutions(country)
        fragments = [f.strip() for f in name_filter or [] if f.strip()]
        if fragments:
            institutions = [i for i in institutions if i.matches(fragments)]
        return sorted(institutions, key=lambda i: i.name.lower())
