"""HTTP client for the GoCardless Bank Account Data (Nordigen) API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Optional

import httpx

from banksync.domain.banking.exceptions import (
    AggregatorAuthenticationError,
    AggregatorConnectionError,
    AggregatorError,
    AggregatorRateLimitError,
)
from banksync.domain.banking.ports import AggregatorPort
from banksync.domain.banking.value_objects import (
    AccountBalance,
    AccountDetails,
    Institution,
    Requisition,
)

if TYPE_CHECKING:
    from banksync.infrastructure.banking.gocardless_config import AggregatorConfig

logger = logging.getLogger(__name__)

# Renew a little before the upstream expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 60

HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


@dataclass
class _Token:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class GoCardlessClient(AggregatorPort):
    """Aggregator adapter over the GoCardless REST API.

    No retries and no throttling: each failed call raises an
    ``AggregatorError`` subclass and pacing is left to the caller.
    """

    def __init__(
        self,
        config: AggregatorConfig,
        clock: Callable[[], float] = time.monotonic,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._clock = clock
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._access: _Token | None = None
        self._refresh: _Token | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url.rstrip("/"),
                timeout=self._config.timeout,
                transport=self._transport,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Access Tokens
    # -------------------------------------------------------------------------

    async def _get_access_token(self) -> str:
        now = self._clock()
        if self._access is not None and self._access.is_valid(now):
            return self._access.value

        if self._refresh is not None and self._refresh.is_valid(now):
            try:
                return await self._refresh_access_token()
            except AggregatorError as e:
                logger.info("Token refresh failed, requesting a new pair: %s", e)

        return await self._create_token_pair()

    async def _create_token_pair(self) -> str:
        payload = await self._request(
            "POST",
            "/token/new/",
            json={
                "secret_id": self._config.secret_id,
                "secret_key": self._config.secret_key,
            },
            authenticated=False,
        )
        now = self._clock()
        self._access = _Token(
            value=payload["access"],
            expires_at=now + self._lifetime(payload.get("access_expires")),
        )
        refresh = payload.get("refresh")
        self._refresh = (
            _Token(
                value=refresh,
                expires_at=now + self._lifetime(payload.get("refresh_expires")),
            )
            if refresh
            else None
        )
        logger.debug("Obtained new aggregator token pair")
        return self._access.value

    async def _refresh_access_token(self) -> str:
        payload = await self._request(
            "POST",
            "/token/refresh/",
            json={"refresh": self._refresh.value},  # type: ignore[union-attr]
            authenticated=False,
        )
        self._access = _Token(
            value=payload["access"],
            expires_at=self._clock() + self._lifetime(payload.get("access_expires")),
        )
        logger.debug("Refreshed aggregator access token")
        return self._access.value

    def _lifetime(self, expires_in: Any) -> float:
        if not expires_in:
            return float(self._config.token_ttl_seconds)
        return max(float(expires_in) - TOKEN_EXPIRY_MARGIN_SECONDS, 0.0)

    # -------------------------------------------------------------------------
    # Institutions & Requisitions
    # -------------------------------------------------------------------------

    async def get_institutions(self, country: str) -> list[Institution]:
        return await self._request(
            "GET",
            "/institutions/",
            params={"country": country.upper()},
            parse=lambda payload: [Institution.from_api(item) for item in payload or []],
        )

    async def create_requisition(
        self,
        institution_id: str,
        redirect_url: str,
        reference: str,
        user_language: Optional[str] = None,
    ) -> Requisition:
        body: dict[str, Any] = {
            "redirect": redirect_url,
            "institution_id": institution_id,
            "reference": reference,
        }
        language = user_language or self._config.user_language
        if language:
            body["user_language"] = language

        return await self._request(
            "POST",
            "/requisitions/",
            json=body,
            parse=Requisition.from_api,
        )

    async def get_requisition(self, requisition_id: str) -> Requisition:
        return await self._request(
            "GET",
            f"/requisitions/{requisition_id}/",
            parse=Requisition.from_api,
        )

    async def list_requisitions(self) -> list[Requisition]:
        return await self._request(
            "GET",
            "/requisitions/",
            parse=lambda payload: [
                Requisition.from_api(item) for item in payload.get("results", [])
            ],
        )

    async def find_requisition_by_reference(
        self,
        reference: str,
    ) -> Optional[Requisition]:
        for requisition in await self.list_requisitions():
            if requisition.reference == reference:
                return requisition
        return None

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    async def get_account_details(self, account_id: str) -> AccountDetails:
        return await self._request(
            "GET",
            f"/accounts/{account_id}/details/",
            parse=lambda payload: AccountDetails.from_api(account_id, payload),
        )

    async def get_account_balances(self, account_id: str) -> list[AccountBalance]:
        return await self._request(
            "GET",
            f"/accounts/{account_id}/balances/",
            parse=lambda payload: [
                AccountBalance.from_api(b) for b in payload.get("balances", [])
            ],
        )

    async def get_account_transactions(
        self,
        account_id: str,
        date_from: date,
        date_to: Optional[date] = None,
    ) -> list[dict]:
        params = {"date_from": date_from.isoformat()}
        if date_to is not None:
            params["date_to"] = date_to.isoformat()

        booked = await self._request(
            "GET",
            f"/accounts/{account_id}/transactions/",
            params=params,
            parse=lambda payload: (payload.get("transactions") or {}).get("booked") or [],
        )
        logger.debug("Fetched %d booked transactions for %s", len(booked), account_id)
        return booked

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        headers = {}
        if authenticated:
            headers["Authorization"] = f"Bearer {await self._get_access_token()}"

        client = await self._get_client()
        try:
            response = await client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TransportError as e:
            msg = f"Unable to reach the aggregator: {e}"
            raise AggregatorConnectionError(msg, endpoint=path) from e

        _raise_for_status(response, path)

        try:
            payload = response.json() if response.content else {}
        except ValueError as e:
            msg = f"Aggregator returned a non-JSON response: {_error_message(response)}"
            raise AggregatorError(
                message=msg,
                status_code=response.status_code,
                endpoint=path,
            ) from e

        if parse is None:
            return payload
        try:
            return parse(payload)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # pydantic's ValidationError is a ValueError
            msg = f"Aggregator returned a malformed response: {e}"
            raise AggregatorError(
                message=msg,
                status_code=response.status_code,
                endpoint=path,
            ) from e


def _raise_for_status(response: httpx.Response, endpoint: str) -> None:
    status = response.status_code
    if status < HTTP_BAD_REQUEST:
        return

    message = _error_message(response)
    logger.debug("Aggregator returned %d for %s: %s", status, endpoint, message)

    if status == HTTP_TOO_MANY_REQUESTS:
        retry_after = response.headers.get("Retry-After")
        raise AggregatorRateLimitError(
            message=message,
            endpoint=endpoint,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )
    if status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
        raise AggregatorAuthenticationError(
            message=message,
            status_code=status,
            endpoint=endpoint,
        )
    raise AggregatorError(message=message, status_code=status, endpoint=endpoint)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("detail") or body.get("summary")
        if detail:
            return str(detail)

    text = response.text.strip() if response.content else ""
    return text[:200] or f"Aggregator request failed with HTTP {response.status_code}"
