"""Stay quote aggregation."""

from collections.abc import Iterator, Sequence
from datetime import date, timedelta
from decimal import Decimal

from stayquote.pricing.guests import classify_guests
from stayquote.pricing.nightly import price_for_night
from stayquote.pricing.rates import resolve_nightly_rate
from stayquote.pricing.types import (
    ZERO,
    EstimatedQuote,
    QuoteLine,
    RoomPricingConfig,
    SeasonalRateData,
    StayQuote,
    StayRequest,
)


def iter_stay_nights(check_in: date, check_out: date) -> Iterator[date]:
    """Yield every night from ``check_in`` up to, not including, ``check_out``."""
    night = check_in
    while night < check_out:
        yield night
        night += timedelta(days=1)


def count_nights(check_in: date, check_out: date) -> int:
    return max(0, (check_out - check_in).days)


def build_quote(
    room: RoomPricingConfig,
    seasonal_rates: Sequence[SeasonalRateData],
    stay: StayRequest,
) -> StayQuote:
    """Price every night of ``stay`` and sum them into a quote.

    ``check_out <= check_in`` gives an empty quote with a zero subtotal;
    rejecting such requests is up to the caller.
    """
    classification = classify_guests(room, stay.adults, stay.children, stay.children_ages)

    lines: list[QuoteLine] = []
    for night in iter_stay_nights(stay.check_in, stay.check_out):
        resolved = resolve_nightly_rate(room, seasonal_rates, night)
        price = price_for_night(
            room.pricing_mode,
            resolved.price,
            room.additional_person_rate,
            room.child_price_per_night,
            classification,
        )
        lines.append(QuoteLine(date=night, price=price, rate_name=resolved.rate_name))

    subtotal = sum((line.price for line in lines), ZERO)
    return StayQuote(nights=tuple(lines), subtotal=subtotal, currency=room.currency)


def estimate_quote(base_price_per_night: Decimal, check_in: date, check_out: date, currency: str) -> EstimatedQuote:
    """Flat ``base price * nights`` estimate.

    Equal to :func:`build_quote` for a ``per_unit`` room without seasonal
    rates, but tagged so callers can tell it is not authoritative.
    """
    nights = count_nights(check_in, check_out)
    return EstimatedQuote(
        night_count=nights,
        nightly_rate=base_price_per_night,
        subtotal=base_price_per_night * nights,
        currency=currency,
    )
