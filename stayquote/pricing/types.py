"""Value types shared by the pricing engine.

Everything here is immutable. A quote is never patched in place: a changed
stay request produces a new quote.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Literal

PricingMode = Literal["per_unit", "per_person", "per_person_sharing"]
AddonPricingType = Literal["per_booking", "per_night", "per_guest", "per_guest_per_night"]

PRICING_MODES: tuple[str, ...] = ("per_unit", "per_person", "per_person_sharing")
ADDON_PRICING_TYPES: tuple[str, ...] = ("per_booking", "per_night", "per_guest", "per_guest_per_night")

DEFAULT_CHILD_AGE_LIMIT = 12
ZERO = Decimal("0")


@dataclass(frozen=True)
class RoomPricingConfig:
    """Pricing-relevant slice of a room."""

    base_price_per_night: Decimal
    pricing_mode: PricingMode = "per_unit"
    currency: str = "ZAR"
    additional_person_rate: Decimal | None = None
    child_price_per_night: Decimal | None = None
    child_free_until_age: int | None = None  # None = no free tier
    child_age_limit: int = DEFAULT_CHILD_AGE_LIMIT
    max_guests: int | None = None


@dataclass(frozen=True)
class SeasonalRateData:
    """A date-ranged override of a room's nightly price (both ends inclusive)."""

    name: str
    start_date: date
    end_date: date
    price_per_night: Decimal
    priority: int = 0
    id: str | None = None

    def covers(self, night: date) -> bool:
        return self.start_date <= night <= self.end_date


@dataclass(frozen=True)
class ResolvedRate:
    price: Decimal
    rate_name: str | None = None  # None = base rate applied
    rate_id: str | None = None


@dataclass(frozen=True)
class GuestClassification:
    paying_adults: int
    paying_children: int
    free_children: int
    children_counted_as_adults: int


@dataclass(frozen=True)
class StayRequest:
    """Dates and guest composition for a single room. ``check_out`` is exclusive."""

    check_in: date
    check_out: date
    adults: int = 1
    children: int = 0
    children_ages: tuple[int, ...] = ()

    @property
    def guest_count(self) -> int:
        return self.adults + self.children


@dataclass(frozen=True)
class QuoteLine:
    date: date
    price: Decimal
    rate_name: str | None = None


@dataclass(frozen=True)
class StayQuote:
    """Authoritative quote, itemised per night."""

    nights: tuple[QuoteLine, ...]
    subtotal: Decimal
    currency: str
    kind: Literal["full"] = field(default="full", init=False)

    @property
    def night_count(self) -> int:
        return len(self.nights)

    @property
    def is_estimate(self) -> bool:
        return False


@dataclass(frozen=True)
class EstimatedQuote:
    """Flat ``base price * nights`` estimate used when the full quote is unavailable."""

    night_count: int
    nightly_rate: Decimal
    subtotal: Decimal
    currency: str
    kind: Literal["estimated"] = field(default="estimated", init=False)

    @property
    def nights(self) -> tuple[QuoteLine, ...]:
        return ()

    @property
    def is_estimate(self) -> bool:
        return True


Quote = StayQuote | EstimatedQuote


@dataclass(frozen=True)
class AddonData:
    name: str
    price: Decimal
    pricing_type: AddonPricingType = "per_booking"
    max_quantity: int = 1
    id: str | None = None


@dataclass(frozen=True)
class SelectedAddon:
    addon: AddonData
    quantity: int = 1


@dataclass(frozen=True)
class RoomQuoteSelection:
    """A room's quote as it sits in a checkout session.

    ``adjusted_total`` replaces the quote subtotal when a coupon or manual
    adjustment has overridden it.
    """

    quote: Quote
    adjusted_total: Decimal | None = None
    guest_count: int = 0

    @property
    def effective_total(self) -> Decimal:
        if self.adjusted_total is not None:
            return self.adjusted_total
        return self.quote.subtotal


@dataclass(frozen=True)
class CheckoutTotals:
    room_total: Decimal
    addons_total: Decimal
    discount_amount: Decimal
    grand_total: Decimal
    is_estimate: bool = False
