"""Booking model — a guest's checkout, stored with the totals it was priced at."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stayquote.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation of one or more rooms for specific dates."""

    __tablename__ = "bookings"

    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    reference: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)

    # Snapshots of what was priced: [{room_id, room_name, adults, children, subtotal}, ...]
    rooms: Mapped[list] = mapped_column(JSON, default=list)
    addons: Mapped[list] = mapped_column(JSON, default=list)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    room_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    addons_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="ZAR")

    status: Mapped[str] = mapped_column(
        String(50),
        default="pending",
        index=True,
    )  # pending, confirmed, checked_in, checked_out, cancelled

    __table_args__ = (Index("ix_bookings_check_in", "check_in"),)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, reference={self.reference!r}, status={self.status})>"
