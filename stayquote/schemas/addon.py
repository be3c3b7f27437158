"""Pydantic v2 request/response schemas for addon endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from stayquote.config import settings
from stayquote.schemas.common import Money

_PRICING_TYPE_PATTERN = "^(per_booking|per_night|per_guest|per_guest_per_night)$"
_ADDON_TYPE_PATTERN = "^(service|product|experience)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddonCreate(BaseModel):
    """Schema for creating a new addon."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    addon_code: str | None = Field(None, max_length=50)
    addon_type: str = Field("service", pattern=_ADDON_TYPE_PATTERN)
    price: Decimal = Field(..., ge=0)
    currency: str = Field(settings.default_currency, min_length=3, max_length=3)
    pricing_type: str = Field("per_booking", pattern=_PRICING_TYPE_PATTERN)
    max_quantity: int = Field(1, ge=1)
    image_url: str | None = Field(None, max_length=1024)
    available_for_rooms: list[uuid.UUID] = []
    is_active: bool = True


class AddonUpdate(BaseModel):
    """Schema for partially updating an addon. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    addon_code: str | None = Field(None, max_length=50)
    addon_type: str | None = Field(None, pattern=_ADDON_TYPE_PATTERN)
    price: Decimal | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    pricing_type: str | None = Field(None, pattern=_PRICING_TYPE_PATTERN)
    max_quantity: int | None = Field(None, ge=1)
    image_url: str | None = Field(None, max_length=1024)
    available_for_rooms: list[uuid.UUID] | None = None
    is_active: bool | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AddonResponse(BaseModel):
    """Full addon record for the management dashboard."""

    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None = None
    addon_code: str | None = None
    addon_type: str
    price: Money
    currency: str
    pricing_type: str
    max_quantity: int
    image_url: str | None = None
    available_for_rooms: list[uuid.UUID] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AddonListResponse(BaseModel):
    items: list[AddonResponse]
    total: int


class PublicAddonResponse(BaseModel):
    """Addon as offered to guests during checkout."""

    id: uuid.UUID
    name: str
    description: str | None = None
    price: Money
    pricing_type: str
    max_quantity: int
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)
