"""Stay pricing and quote engine.

Pure, synchronous functions over in-memory data. Loading rooms and rates is
the caller's concern; see ``stayquote.services.pricing_service``.
"""

from stayquote.pricing.addons import addon_charge, addons_total, clamp_quantity
from stayquote.pricing.checkout import totalize
from stayquote.pricing.errors import (
    CheckoutValidationError,
    InvalidDateRangeError,
    QuoteError,
    QuoteMismatchError,
    RoomInactiveError,
    RoomNotFoundError,
    TenantMismatchError,
)
from stayquote.pricing.guests import classify_guests
from stayquote.pricing.nightly import price_for_night
from stayquote.pricing.quote import build_quote, count_nights, estimate_quote, iter_stay_nights
from stayquote.pricing.rates import find_seasonal_rate, resolve_nightly_rate
from stayquote.pricing.types import (
    AddonData,
    CheckoutTotals,
    EstimatedQuote,
    GuestClassification,
    Quote,
    QuoteLine,
    ResolvedRate,
    RoomPricingConfig,
    RoomQuoteSelection,
    SeasonalRateData,
    SelectedAddon,
    StayQuote,
    StayRequest,
)

__all__ = [
    "AddonData",
    "CheckoutTotals",
    "CheckoutValidationError",
    "EstimatedQuote",
    "GuestClassification",
    "InvalidDateRangeError",
    "Quote",
    "QuoteError",
    "QuoteLine",
    "QuoteMismatchError",
    "ResolvedRate",
    "RoomInactiveError",
    "RoomNotFoundError",
    "RoomPricingConfig",
    "RoomQuoteSelection",
    "SeasonalRateData",
    "SelectedAddon",
    "StayQuote",
    "StayRequest",
    "TenantMismatchError",
    "addon_charge",
    "addons_total",
    "build_quote",
    "clamp_quantity",
    "classify_guests",
    "count_nights",
    "estimate_quote",
    "find_seasonal_rate",
    "iter_stay_nights",
    "price_for_night",
    "resolve_nightly_rate",
    "totalize",
]
