"""Unit tests for stay quotes and the flat estimate."""

from datetime import date, timedelta
from decimal import Decimal

from stayquote.pricing import (
    RoomPricingConfig,
    SeasonalRateData,
    StayRequest,
    build_quote,
    count_nights,
    estimate_quote,
    iter_stay_nights,
)

CHECK_IN = date(2026, 3, 10)


def _stay(nights: int, adults: int = 2, children: int = 0, ages: tuple[int, ...] = ()) -> StayRequest:
    return StayRequest(
        check_in=CHECK_IN,
        check_out=CHECK_IN + timedelta(days=nights),
        adults=adults,
        children=children,
        children_ages=ages,
    )


class TestNightEnumeration:
    def test_check_out_is_exclusive(self):
        nights = list(iter_stay_nights(date(2026, 2, 27), date(2026, 3, 2)))
        assert nights == [date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1)]

    def test_crosses_year_end(self):
        assert count_nights(date(2026, 12, 30), date(2027, 1, 2)) == 3

    def test_reversed_range_counts_zero(self):
        assert count_nights(date(2026, 1, 5), date(2026, 1, 1)) == 0
        assert list(iter_stay_nights(date(2026, 1, 5), date(2026, 1, 1))) == []


class TestBuildQuote:
    """Per-night itemisation and subtotal."""

    def test_per_unit_without_rates(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("1000"))
        quote = build_quote(room, [], _stay(3))

        assert quote.night_count == 3
        assert [line.price for line in quote.nights] == [Decimal("1000")] * 3
        assert quote.subtotal == Decimal("3000")
        assert quote.currency == "ZAR"
        assert quote.kind == "full"
        assert quote.is_estimate is False

    def test_nights_in_chronological_order(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("100"))
        quote = build_quote(room, [], _stay(5))
        dates = [line.date for line in quote.nights]
        assert dates == sorted(dates)
        assert dates[0] == CHECK_IN
        assert dates[-1] == CHECK_IN + timedelta(days=4)

    def test_seasonal_rate_named_on_its_nights(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("1000"))
        peak = SeasonalRateData(
            name="Peak",
            start_date=CHECK_IN + timedelta(days=1),
            end_date=CHECK_IN + timedelta(days=1),
            price_per_night=Decimal("1500"),
            priority=1,
        )
        quote = build_quote(room, [peak], _stay(3))

        assert [line.rate_name for line in quote.nights] == [None, "Peak", None]

    def test_seasonal_rate_goes_through_pricing_mode(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("500"), pricing_mode="per_person")
        rate = SeasonalRateData(
            name="High",
            start_date=CHECK_IN,
            end_date=CHECK_IN,
            price_per_night=Decimal("700"),
        )
        quote = build_quote(room, [rate], _stay(2, adults=2))
        assert [line.price for line in quote.nights] == [Decimal("1400"), Decimal("1000")]
        assert quote.subtotal == Decimal("2400")

    def test_currency_comes_from_room(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("80"), currency="EUR")
        assert build_quote(room, [], _stay(1)).currency == "EUR"

    def test_free_children_do_not_change_subtotal(self):
        room = RoomPricingConfig(
            base_price_per_night=Decimal("500"),
            pricing_mode="per_person",
            child_price_per_night=Decimal("250"),
            child_free_until_age=3,
        )
        adults_only = build_quote(room, [], _stay(2, adults=2))
        with_toddlers = build_quote(room, [], _stay(2, adults=2, children=2, ages=(0, 2)))
        assert with_toddlers.subtotal == adults_only.subtotal

    def test_identical_inputs_give_identical_quotes(self):
        room = RoomPricingConfig(
            base_price_per_night=Decimal("800"),
            pricing_mode="per_person_sharing",
            additional_person_rate=Decimal("200"),
        )
        rates = [
            SeasonalRateData(
                name="Peak",
                start_date=CHECK_IN,
                end_date=CHECK_IN + timedelta(days=2),
                price_per_night=Decimal("900"),
            )
        ]
        stay = _stay(4, adults=3, children=1, ages=(8,))
        assert build_quote(room, rates, stay) == build_quote(room, rates, stay)


class TestZeroNightStay:
    def test_same_day_gives_empty_quote(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("1000"))
        quote = build_quote(room, [], StayRequest(check_in=CHECK_IN, check_out=CHECK_IN))
        assert quote.night_count == 0
        assert quote.subtotal == Decimal("0")
        assert quote.nights == ()

    def test_reversed_dates_give_empty_quote(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("1000"))
        quote = build_quote(room, [], StayRequest(check_in=CHECK_IN, check_out=CHECK_IN - timedelta(days=2)))
        assert quote.night_count == 0
        assert quote.subtotal == Decimal("0")


class TestEstimateQuote:
    """Flat base-price estimate used when pricing data is unavailable."""

    def test_flat_price_times_nights(self):
        estimate = estimate_quote(Decimal("1200"), CHECK_IN, CHECK_IN + timedelta(days=3), "ZAR")
        assert estimate.subtotal == Decimal("3600")
        assert estimate.night_count == 3
        assert estimate.nightly_rate == Decimal("1200")
        assert estimate.kind == "estimated"
        assert estimate.is_estimate is True
        assert estimate.nights == ()

    def test_matches_per_unit_quote_without_rates(self):
        room = RoomPricingConfig(base_price_per_night=Decimal("1200"), currency="USD")
        stay = _stay(4, adults=3)
        full = build_quote(room, [], stay)
        estimate = estimate_quote(room.base_price_per_night, stay.check_in, stay.check_out, room.currency)
        assert estimate.subtotal == full.subtotal
        assert estimate.night_count == full.night_count
        assert estimate.currency == full.currency

    def test_zero_nights(self):
        estimate = estimate_quote(Decimal("1200"), CHECK_IN, CHECK_IN, "ZAR")
        assert estimate.subtotal == Decimal("0")
        assert estimate.night_count == 0
