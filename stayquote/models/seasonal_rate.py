"""SeasonalRate model — date-ranged nightly price overrides for a room."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayquote.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from stayquote.pricing.types import SeasonalRateData


class SeasonalRate(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A named price override for ``start_date``..``end_date`` (inclusive)."""

    __tablename__ = "seasonal_rates"

    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    room: Mapped["Room"] = relationship(back_populates="seasonal_rates")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="seasonal_rates_valid_date_range"),
        CheckConstraint("price_per_night >= 0", name="seasonal_rates_valid_price"),
        Index("ix_seasonal_rates_dates", "start_date", "end_date"),
    )

    def to_rate_data(self) -> SeasonalRateData:
        return SeasonalRateData(
            id=str(self.id),
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            price_per_night=self.price_per_night,
            priority=self.priority,
        )

    def __repr__(self) -> str:
        return (
            f"<SeasonalRate(id={self.id}, room_id={self.room_id}, name={self.name!r}, "
            f"{self.start_date}..{self.end_date}, priority={self.priority})>"
        )
