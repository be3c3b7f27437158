"""Unit tests for seasonal rate resolution."""

from datetime import date
from decimal import Decimal

from stayquote.pricing import RoomPricingConfig, SeasonalRateData, find_seasonal_rate, resolve_nightly_rate

ROOM = RoomPricingConfig(base_price_per_night=Decimal("1000"))


def _rate(name: str, start: date, end: date, price: str, priority: int = 0) -> SeasonalRateData:
    return SeasonalRateData(
        id=name.lower(),
        name=name,
        start_date=start,
        end_date=end,
        price_per_night=Decimal(price),
        priority=priority,
    )


class TestResolveNightlyRate:
    """Which price applies on a single night."""

    def test_no_rates_uses_base_price(self):
        resolved = resolve_nightly_rate(ROOM, [], date(2026, 3, 1))
        assert resolved.price == Decimal("1000")
        assert resolved.rate_name is None
        assert resolved.rate_id is None

    def test_rate_outside_range_is_ignored(self):
        rates = [_rate("Winter", date(2026, 6, 1), date(2026, 8, 31), "800")]
        resolved = resolve_nightly_rate(ROOM, rates, date(2026, 5, 31))
        assert resolved.price == Decimal("1000")
        assert resolved.rate_name is None

    def test_single_covering_rate_wins_over_base(self):
        rates = [_rate("Peak", date(2026, 12, 1), date(2026, 12, 31), "1500")]
        resolved = resolve_nightly_rate(ROOM, rates, date(2026, 12, 10))
        assert resolved.price == Decimal("1500")
        assert resolved.rate_name == "Peak"
        assert resolved.rate_id == "peak"

    def test_cheaper_rate_still_overrides_base(self):
        rates = [_rate("Special", date(2026, 2, 1), date(2026, 2, 28), "10")]
        assert resolve_nightly_rate(ROOM, rates, date(2026, 2, 14)).price == Decimal("10")

    def test_range_ends_are_inclusive(self):
        rates = [_rate("Weekend", date(2026, 4, 4), date(2026, 4, 5), "1200")]
        assert resolve_nightly_rate(ROOM, rates, date(2026, 4, 4)).rate_name == "Weekend"
        assert resolve_nightly_rate(ROOM, rates, date(2026, 4, 5)).rate_name == "Weekend"
        assert resolve_nightly_rate(ROOM, rates, date(2026, 4, 6)).rate_name is None

    def test_single_day_rate(self):
        rates = [_rate("Event", date(2026, 9, 9), date(2026, 9, 9), "2500")]
        assert resolve_nightly_rate(ROOM, rates, date(2026, 9, 9)).price == Decimal("2500")


class TestOverlappingRates:
    """Priority resolution between overlapping rates."""

    def test_highest_priority_wins(self):
        rates = [
            _rate("Festive", date(2026, 12, 15), date(2027, 1, 5), "1500", priority=1),
            _rate("New Year", date(2026, 12, 30), date(2027, 1, 1), "2000", priority=2),
        ]
        assert resolve_nightly_rate(ROOM, rates, date(2026, 12, 31)).rate_name == "New Year"
        assert resolve_nightly_rate(ROOM, rates, date(2026, 12, 20)).rate_name == "Festive"

    def test_priority_wins_regardless_of_order(self):
        low = _rate("Low", date(2026, 1, 1), date(2026, 1, 31), "900", priority=0)
        high = _rate("High", date(2026, 1, 1), date(2026, 1, 31), "1100", priority=5)
        night = date(2026, 1, 15)
        assert find_seasonal_rate([low, high], night) is high
        assert find_seasonal_rate([high, low], night) is high

    def test_equal_priority_first_in_list_wins(self):
        first = _rate("First", date(2026, 1, 1), date(2026, 1, 31), "900", priority=1)
        second = _rate("Second", date(2026, 1, 10), date(2026, 1, 20), "1100", priority=1)
        night = date(2026, 1, 15)
        assert find_seasonal_rate([first, second], night) is first
        assert find_seasonal_rate([second, first], night) is second

    def test_equal_priority_is_stable_across_calls(self):
        rates = [
            _rate("A", date(2026, 1, 1), date(2026, 1, 31), "900", priority=1),
            _rate("B", date(2026, 1, 1), date(2026, 1, 31), "1100", priority=1),
        ]
        night = date(2026, 1, 15)
        results = {resolve_nightly_rate(ROOM, rates, night) for _ in range(10)}
        assert len(results) == 1

    def test_negative_priority_still_beats_base(self):
        rates = [_rate("Low", date(2026, 1, 1), date(2026, 1, 31), "700", priority=-3)]
        assert resolve_nightly_rate(ROOM, rates, date(2026, 1, 2)).price == Decimal("700")
