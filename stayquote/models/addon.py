"""Addon model — optional extras offered with a booking."""

import uuid
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stayquote.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from stayquote.pricing.types import AddonData


class Addon(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A service, product or experience a guest can add to a stay."""

    __tablename__ = "addons"

    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    addon_code: Mapped[str | None] = mapped_column(String(50), default=None)
    addon_type: Mapped[str] = mapped_column(String(20), default="service")  # service, product, experience
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="ZAR")
    pricing_type: Mapped[str] = mapped_column(
        String(30), default="per_booking"
    )  # per_booking, per_night, per_guest, per_guest_per_night
    max_quantity: Mapped[int] = mapped_column(Integer, default=1)
    image_url: Mapped[str | None] = mapped_column(String(1024), default=None)
    # Empty list means the addon is offered with every room
    available_for_rooms: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def is_available_for(self, room_id: uuid.UUID) -> bool:
        if not self.available_for_rooms:
            return True
        return str(room_id) in {str(r) for r in self.available_for_rooms}

    def to_addon_data(self) -> AddonData:
        return AddonData(
            id=str(self.id),
            name=self.name,
            price=self.price,
            pricing_type=self.pricing_type,  # type: ignore[arg-type]
            max_quantity=self.max_quantity,
        )

    def __repr__(self) -> str:
        return f"<Addon(id={self.id}, name={self.name!r}, pricing_type={self.pricing_type!r})>"
