"""Async HTTP client for the stay pricing API.

Callers that need a price even when the pricing API is down can pass a
``fallback_base_price``; they then get an :class:`EstimatedQuote` instead of
an error, and can tell the two apart by ``quote.is_estimate``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from stayquote.config import settings
from stayquote.pricing import (
    CheckoutValidationError,
    InvalidDateRangeError,
    Quote,
    QuoteLine,
    RoomInactiveError,
    RoomNotFoundError,
    StayQuote,
    TenantMismatchError,
    estimate_quote,
)

logger = logging.getLogger(__name__)


class PricingClientError(RuntimeError):
    """The pricing API answered with something the client cannot use."""


class PricingUnavailableError(PricingClientError):
    """The pricing API could not be reached (transport failure or 5xx)."""


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json().get("detail")
    except (ValueError, AttributeError):
        return response.text


class PricingClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        retries: int | None = None,
        backoff: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.pricing_api_url).rstrip("/")
        self._retries = max(1, retries if retries is not None else settings.pricing_api_retries)
        self._backoff = backoff
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.pricing_api_timeout,
        )

    async def __aenter__(self) -> PricingClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_room_pricing(
        self,
        tenant_id: uuid.UUID | str,
        room_id: uuid.UUID | str,
        check_in: date,
        check_out: date,
        *,
        adults: int = 1,
        children: int = 0,
        children_ages: Sequence[int] = (),
        fallback_base_price: Decimal | None = None,
        fallback_currency: str | None = None,
    ) -> Quote:
        """Fetch the quote for one room, or estimate it when the API is unreachable.

        Raises:
            InvalidDateRangeError: ``check_out`` is not after ``check_in``.
            RoomNotFoundError, TenantMismatchError, RoomInactiveError,
            CheckoutValidationError: as reported by the API (404, 403, 409,
                422); these never degrade to an estimate.
            PricingUnavailableError: the API is unreachable and no
                ``fallback_base_price`` was given.
        """
        if check_out <= check_in:
            raise InvalidDateRangeError(check_in, check_out)

        params: list[tuple[str, Any]] = [
            ("check_in", check_in.isoformat()),
            ("check_out", check_out.isoformat()),
            ("adults", adults),
            ("children", children),
        ]
        params.extend(("children_ages", age) for age in children_ages)
        url = f"{self._base_url}/api/v1/public/{tenant_id}/rooms/{room_id}/pricing"

        try:
            response = await self._request(url, params)
        except PricingUnavailableError:
            if fallback_base_price is None:
                raise
            logger.warning(
                "Pricing API unavailable for room %s; falling back to flat estimate at %s/night",
                room_id,
                fallback_base_price,
            )
            return estimate_quote(
                fallback_base_price,
                check_in,
                check_out,
                fallback_currency or settings.default_currency,
            )

        self._raise_for_quote_error(response, tenant_id, room_id, check_in, check_out)
        return self._parse_quote(response)

    async def _request(self, url: str, params: list[tuple[str, Any]]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=self._backoff, min=0, max=4),
            retry=retry_if_exception_type(PricingUnavailableError),
        ):
            with attempt:
                try:
                    response = await self._client.get(url, params=params)
                except httpx.TransportError as exc:
                    raise PricingUnavailableError(f"Pricing API unreachable: {exc}") from exc
                if response.status_code >= 500:
                    raise PricingUnavailableError(f"Pricing API returned {response.status_code}")
                return response
        raise PricingUnavailableError("Pricing API request was not attempted")

    @staticmethod
    def _raise_for_quote_error(
        response: httpx.Response,
        tenant_id: object,
        room_id: object,
        check_in: date,
        check_out: date,
    ) -> None:
        code = response.status_code
        if code < 400:
            return
        if code == 404:
            raise RoomNotFoundError(room_id)
        if code == 403:
            raise TenantMismatchError(room_id, tenant_id)
        if code == 409:
            raise RoomInactiveError(room_id)
        if code == 422:
            detail = _error_detail(response)
            if isinstance(detail, str) and "must be after check_in" in detail:
                raise InvalidDateRangeError(check_in, check_out)
            raise CheckoutValidationError(f"Pricing API rejected the request: {detail}")
        raise PricingClientError(f"Pricing API returned {code}: {response.text}")

    @staticmethod
    def _parse_quote(response: httpx.Response) -> StayQuote:
        try:
            payload = response.json()
            nights = tuple(
                QuoteLine(
                    date=date.fromisoformat(night["date"]),
                    price=Decimal(str(night["price"])),
                    rate_name=night.get("rate_name"),
                )
                for night in payload["nights"]
            )
            return StayQuote(
                nights=nights,
                subtotal=Decimal(str(payload["subtotal"])),
                currency=payload["currency"],
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise PricingClientError(f"Malformed pricing response: {exc}") from exc
