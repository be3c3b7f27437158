"""Rate calendar resolution: which nightly price applies on a given date."""

from collections.abc import Iterable
from datetime import date

from stayquote.pricing.types import ResolvedRate, RoomPricingConfig, SeasonalRateData


def find_seasonal_rate(seasonal_rates: Iterable[SeasonalRateData], night: date) -> SeasonalRateData | None:
    """Return the seasonal rate effective on ``night``, or ``None``.

    Among overlapping rates the highest priority wins. On equal priority the
    rate that comes first in ``seasonal_rates`` wins, so callers control the
    tie-break by the order they load rates in.
    """
    winner: SeasonalRateData | None = None
    for rate in seasonal_rates:
        if not rate.covers(night):
            continue
        if winner is None or rate.priority > winner.priority:
            winner = rate
    return winner


def resolve_nightly_rate(
    room: RoomPricingConfig,
    seasonal_rates: Iterable[SeasonalRateData],
    night: date,
) -> ResolvedRate:
    """Resolve the base nightly price for one calendar night."""
    rate = find_seasonal_rate(seasonal_rates, night)
    if rate is None:
        return ResolvedRate(price=room.base_price_per_night)
    return ResolvedRate(price=rate.price_per_night, rate_name=rate.name, rate_id=rate.id)
