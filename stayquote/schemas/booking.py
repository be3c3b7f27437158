"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from stayquote.schemas.common import Money
from stayquote.schemas.pricing import CheckoutSelection, StayRoomRequest

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingRoomRequest(StayRoomRequest):
    model_config = ConfigDict(extra="forbid")


class BookingCreate(CheckoutSelection):
    """Public booking request: the checkout selection plus guest details.

    ``total_amount`` is what the client displayed to the guest. It is checked
    against a server-side recomputation before anything is stored. Price
    overrides such as ``adjusted_total`` or ``discount_amount`` are rejected.
    """

    rooms: list[BookingRoomRequest] = Field(..., min_length=1)
    guest_name: str = Field(..., min_length=1, max_length=255)
    guest_email: EmailStr
    guest_phone: str | None = Field(None, max_length=50)
    special_requests: str | None = None
    total_amount: Decimal = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Booking confirmation returned after creation or lookup by reference."""

    id: uuid.UUID
    reference: str
    guest_name: str
    guest_email: str
    guest_phone: str | None = None
    check_in: date
    check_out: date
    rooms: list[dict]
    addons: list[dict]
    special_requests: str | None = None
    room_total: Money
    addons_total: Money
    discount_amount: Money
    total_amount: Money
    currency: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
