"""Pydantic v2 request/response schemas for seasonal rates."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stayquote.schemas.common import Money


class SeasonalRateCreate(BaseModel):
    """Schema for creating a seasonal rate on a room."""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: date
    price_per_night: Decimal = Field(..., ge=0)
    priority: int = 0

    @model_validator(mode="after")
    def check_dates(self) -> "SeasonalRateCreate":
        """Validate that end_date is not before start_date (single-day rates are allowed)."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class SeasonalRateUpdate(BaseModel):
    """Schema for partially updating a seasonal rate. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    price_per_night: Decimal | None = Field(None, ge=0)
    priority: int | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "SeasonalRateUpdate":
        """If both dates are provided, validate end_date >= start_date."""
        if self.start_date is not None and self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class SeasonalRateResponse(BaseModel):
    id: uuid.UUID
    room_id: uuid.UUID
    name: str
    start_date: date
    end_date: date
    price_per_night: Money
    priority: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
