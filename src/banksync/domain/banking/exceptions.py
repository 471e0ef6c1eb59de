"""Banking domain exceptions.

This module defines exceptions specific to the banking bounded context:
failures talking to the PSD2 aggregator, consent (requisition) problems and
missing bank accounts.

Aggregator errors always carry the upstream HTTP status code (``None`` for
network failures) and the upstream message where one was returned.
"""

from typing import Any, Optional

from banksync.domain.shared.exceptions import (
    BusinessRuleViolation,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
)

# =============================================================================
# Base Banking Exception
# =============================================================================


class BankingDomainError(DomainException):
    """Base exception for banking domain errors."""


# =============================================================================
# Aggregator Exceptions
# =============================================================================


class AggregatorError(BankingDomainError):
    """Raised when a call to the aggregator API fails.

    This is the generic upstream failure. Use the subclasses when the cause
    is known (rate limiting, rejected credentials, unreachable service).
    """

    def __init__(
        self,
        message: str = "Aggregator request failed",
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        code: ErrorCode = ErrorCode.AGGREGATOR_REQUEST_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        merged: dict[str, Any] = {"status_code": status_code, "endpoint": endpoint}
        if details:
            merged.update(details)
        super().__init__(message=message, code=code, details=merged)
        self.status_code = status_code
        self.endpoint = endpoint


class AggregatorRateLimitError(AggregatorError):
    """Raised when the aggregator answers with HTTP 429.

    Transient: the account is marked as failed and the caller may retry the
    sync later.
    """

    def __init__(
        self,
        message: str = "Aggregator rate limit exceeded",
        endpoint: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=429,
            endpoint=endpoint,
            code=ErrorCode.AGGREGATOR_RATE_LIMITED,
            details={"retry_after": retry_after},
        )
        self.retry_after = retry_after


class AggregatorAuthenticationError(AggregatorError):
    """Raised when the aggregator rejects our secrets or the user's consent.

    Permanent until the user re-authorizes the bank connection.
    """

    def __init__(
        self,
        message: str = "Aggregator rejected the credentials or consent",
        status_code: Optional[int] = 401,
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            endpoint=endpoint,
            code=ErrorCode.AGGREGATOR_AUTHENTICATION_FAILED,
        )


class AggregatorConnectionError(AggregatorError):
    """Raised when the aggregator cannot be reached (DNS, TCP, timeout)."""

    def __init__(
        self,
        message: str = "Unable to reach the aggregator",
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=None,
            endpoint=endpoint,
            code=ErrorCode.AGGREGATOR_UNREACHABLE,
        )


# =============================================================================
# Requisition Exceptions
# =============================================================================


class RequisitionNotFoundError(EntityNotFoundError):
    """Raised when no requisition matches an id or reference."""

    def __init__(self, reference: str) -> None:
        super().__init__(
            message=f"Requisition with reference {reference} not found",
            code=ErrorCode.REQUISITION_NOT_FOUND,
            details={"reference": reference},
        )


class RequisitionNotLinkedError(BusinessRuleViolation):
    """Raised when a requisition has not been authorized by the user yet."""

    def __init__(self, requisition_id: str, status: str) -> None:
        super().__init__(
            message="Bank connection not yet completed",
            code=ErrorCode.REQUISITION_NOT_LINKED,
            details={"requisition_id": requisition_id, "status": status},
        )
        self.status = status


# =============================================================================
# Account Exceptions
# =============================================================================


class BankAccountNotFoundError(EntityNotFoundError):
    """Raised when a stored bank account is not found for the current user."""

    def __init__(self, account_id: int | str | None = None) -> None:
        msg = (
            f"Bank account '{account_id}' not found"
            if account_id is not None
            else "Bank account not found"
        )
        super().__init__(
            message=msg,
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            details={"account_id": account_id} if account_id is not None else None,
        )
