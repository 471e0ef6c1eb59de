"""Banking queries."""

from banksync.application.queries.banking.list_institutions_query import (
    ListInstitutionsQuery,
)

__all__ = ["ListInstitutionsQuery"]
