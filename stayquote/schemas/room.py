"""Pydantic v2 request/response schemas for room endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stayquote.config import settings
from stayquote.schemas.common import Money

_PRICING_MODE_PATTERN = "^(per_unit|per_person|per_person_sharing)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomCreate(BaseModel):
    """Schema for creating a new room."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    room_code: str | None = Field(None, max_length=50)
    max_guests: int = Field(2, ge=1)
    max_children: int | None = Field(None, ge=0)
    base_price_per_night: Decimal = Field(..., ge=0)
    currency: str = Field(settings.default_currency, min_length=3, max_length=3)
    pricing_mode: str = Field("per_unit", pattern=_PRICING_MODE_PATTERN)
    additional_person_rate: Decimal | None = Field(None, ge=0)
    child_price_per_night: Decimal | None = Field(None, ge=0)
    child_free_until_age: int | None = Field(None, ge=0)
    child_age_limit: int = Field(settings.default_child_age_limit, ge=0)
    is_active: bool = True

    @model_validator(mode="after")
    def check_pricing(self) -> "RoomCreate":
        """Sharing rooms need an extra-person rate; the free tier must sit below the age limit."""
        if self.pricing_mode == "per_person_sharing" and self.additional_person_rate is None:
            raise ValueError("additional_person_rate is required for per_person_sharing rooms")
        if self.child_free_until_age is not None and self.child_free_until_age > self.child_age_limit:
            raise ValueError("child_free_until_age must not exceed child_age_limit")
        return self


class RoomUpdate(BaseModel):
    """Schema for partially updating a room. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    room_code: str | None = Field(None, max_length=50)
    max_guests: int | None = Field(None, ge=1)
    max_children: int | None = Field(None, ge=0)
    base_price_per_night: Decimal | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    pricing_mode: str | None = Field(None, pattern=_PRICING_MODE_PATTERN)
    additional_person_rate: Decimal | None = Field(None, ge=0)
    child_price_per_night: Decimal | None = Field(None, ge=0)
    child_free_until_age: int | None = Field(None, ge=0)
    child_age_limit: int | None = Field(None, ge=0)
    is_active: bool | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomResponse(BaseModel):
    """Room details including the full pricing configuration."""

    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None = None
    room_code: str | None = None
    max_guests: int
    max_children: int | None = None
    base_price_per_night: Money
    currency: str
    pricing_mode: str
    additional_person_rate: Money | None = None
    child_price_per_night: Money | None = None
    child_free_until_age: int | None = None
    child_age_limit: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
    """Paginated list of rooms."""

    items: list[RoomResponse]
    total: int
