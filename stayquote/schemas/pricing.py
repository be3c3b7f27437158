"""Pydantic v2 schemas for pricing, effective-rate and checkout quote endpoints."""

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from stayquote.schemas.common import Money

# ---------------------------------------------------------------------------
# Stay pricing (GET /public/{tenant_id}/rooms/{room_id}/pricing)
# ---------------------------------------------------------------------------


class NightPrice(BaseModel):
    date: date
    price: Money
    rate_name: str | None = None


class RoomPricingResponse(BaseModel):
    """Per-night itemised quote for one room and date range."""

    room_name: str
    nights: list[NightPrice]
    subtotal: Money
    currency: str
    night_count: int


# ---------------------------------------------------------------------------
# Effective rate lookups (management side)
# ---------------------------------------------------------------------------


class SeasonalRateSummary(BaseModel):
    id: uuid.UUID
    name: str
    price_per_night: Money


class EffectivePriceResponse(BaseModel):
    """Effective nightly price of a room on one date."""

    date: date
    base_price: Money
    effective_price: Money
    seasonal_rate: SeasonalRateSummary | None = None
    currency: str


class EffectivePriceRangeResponse(BaseModel):
    """Effective nightly prices across a date range, before guest pricing."""

    nights: list[EffectivePriceResponse]
    total_amount: Money
    currency: str
    night_count: int


# ---------------------------------------------------------------------------
# Checkout quote (POST /public/{tenant_id}/checkout/quote)
# ---------------------------------------------------------------------------


class StayRoomRequest(BaseModel):
    """One selected room with its own guest composition."""

    room_id: uuid.UUID
    adults: int = Field(1, ge=0)
    children: int = Field(0, ge=0)
    children_ages: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_guests(self) -> "StayRoomRequest":
        """A room must host at least one guest."""
        if self.adults + self.children < 1:
            raise ValueError("each room needs at least one guest")
        if any(age < 0 for age in self.children_ages):
            raise ValueError("children_ages must not contain negative ages")
        return self


class CheckoutRoomRequest(StayRoomRequest):
    adjusted_total: Decimal | None = Field(None, ge=0)


class CheckoutAddonRequest(BaseModel):
    addon_id: uuid.UUID
    quantity: int = Field(1, ge=0)


class CheckoutSelection(BaseModel):
    """Dates, rooms and add-ons of a checkout, without any price overrides."""

    check_in: date
    check_out: date
    rooms: list[StayRoomRequest] = Field(..., min_length=1)
    addons: list[CheckoutAddonRequest] = Field(default_factory=list)


class CheckoutQuoteRequest(CheckoutSelection):
    """Everything needed to re-derive checkout totals from scratch."""

    rooms: list[CheckoutRoomRequest] = Field(..., min_length=1)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)


class RoomQuoteResponse(RoomPricingResponse):
    room_id: uuid.UUID
    adults: int
    children: int
    adjusted_total: Money | None = None
    total: Money


class AddonChargeResponse(BaseModel):
    addon_id: uuid.UUID
    name: str
    pricing_type: str
    unit_price: Money
    quantity: int
    charge: Money


class CheckoutQuoteResponse(BaseModel):
    """Checkout totals with the room quotes and addon charges they came from."""

    rooms: list[RoomQuoteResponse]
    addons: list[AddonChargeResponse]
    night_count: int
    guest_count: int
    room_total: Money
    addons_total: Money
    discount_amount: Money
    grand_total: Money
    currency: str
