"""Room model — a bookable unit (or room type) with its pricing configuration."""

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayquote.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from stayquote.pricing.types import RoomPricingConfig


class Room(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A room owned by a tenant's property."""

    __tablename__ = "rooms"

    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    room_code: Mapped[str | None] = mapped_column(String(50), default=None)
    max_guests: Mapped[int] = mapped_column(Integer, default=2)
    max_children: Mapped[int | None] = mapped_column(Integer, default=None)

    # Pricing
    base_price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="ZAR")
    pricing_mode: Mapped[str] = mapped_column(String(30), default="per_unit")  # per_unit, per_person, per_person_sharing
    additional_person_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    child_price_per_night: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    child_free_until_age: Mapped[int | None] = mapped_column(Integer, default=None)
    child_age_limit: Mapped[int] = mapped_column(Integer, default=12)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    seasonal_rates: Mapped[list["SeasonalRate"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="room", cascade="all, delete-orphan"
    )

    def to_pricing_config(self) -> RoomPricingConfig:
        """Snapshot the pricing fields into the engine's immutable config."""
        return RoomPricingConfig(
            base_price_per_night=self.base_price_per_night,
            pricing_mode=self.pricing_mode,  # type: ignore[arg-type]
            currency=self.currency,
            additional_person_rate=self.additional_person_rate,
            child_price_per_night=self.child_price_per_night,
            child_free_until_age=self.child_free_until_age,
            child_age_limit=self.child_age_limit,
            max_guests=self.max_guests,
        )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, name={self.name!r}, mode={self.pricing_mode!r})>"
