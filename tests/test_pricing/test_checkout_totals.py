"""Unit tests for the checkout totalizer."""

from datetime import date, timedelta
from decimal import Decimal

from stayquote.pricing import (
    AddonData,
    QuoteLine,
    RoomQuoteSelection,
    SelectedAddon,
    StayQuote,
    estimate_quote,
    totalize,
)


def _quote(subtotal: str, nights: int = 2) -> StayQuote:
    start = date(2026, 5, 1)
    price = Decimal(subtotal) / nights
    return StayQuote(
        nights=tuple(QuoteLine(date=start + timedelta(days=i), price=price) for i in range(nights)),
        subtotal=Decimal(subtotal),
        currency="ZAR",
    )


class TestTotalize:
    """Room, add-on and grand totals."""

    def test_sums_room_subtotals(self):
        totals = totalize(
            [RoomQuoteSelection(_quote("2000"), guest_count=2), RoomQuoteSelection(_quote("1500"), guest_count=1)],
            [],
        )
        assert totals.room_total == Decimal("3500")
        assert totals.addons_total == Decimal("0")
        assert totals.grand_total == Decimal("3500")

    def test_adjusted_total_replaces_subtotal(self):
        totals = totalize([RoomQuoteSelection(_quote("2000"), adjusted_total=Decimal("1800"), guest_count=2)], [])
        assert totals.room_total == Decimal("1800")

    def test_adjusted_total_of_zero_is_honoured(self):
        totals = totalize([RoomQuoteSelection(_quote("2000"), adjusted_total=Decimal("0"), guest_count=2)], [])
        assert totals.room_total == Decimal("0")

    def test_discount_reduces_grand_total(self):
        totals = totalize([RoomQuoteSelection(_quote("2000"), guest_count=2)], [], Decimal("250"))
        assert totals.discount_amount == Decimal("250")
        assert totals.grand_total == Decimal("1750")

    def test_grand_total_never_negative(self):
        totals = totalize([RoomQuoteSelection(_quote("100"), guest_count=1)], [], Decimal("1000"))
        assert totals.grand_total == Decimal("0")

    def test_addons_use_longest_stay_and_all_guests(self):
        rooms = [
            RoomQuoteSelection(_quote("2000", nights=2), guest_count=2),
            RoomQuoteSelection(_quote("3000", nights=3), guest_count=3),
        ]
        breakfast = AddonData(name="Breakfast", price=Decimal("10"), pricing_type="per_guest_per_night")
        totals = totalize(rooms, [SelectedAddon(breakfast, 1)])
        assert totals.addons_total == Decimal("150")

    def test_explicit_scope_overrides_defaults(self):
        rooms = [RoomQuoteSelection(_quote("2000", nights=2), guest_count=2)]
        breakfast = AddonData(name="Breakfast", price=Decimal("10"), pricing_type="per_guest_per_night")
        totals = totalize(rooms, [SelectedAddon(breakfast, 1)], night_count=1, guest_count=1)
        assert totals.addons_total == Decimal("10")

    def test_recomputing_is_idempotent(self):
        rooms = [RoomQuoteSelection(_quote("2000"), guest_count=2)]
        addons = [SelectedAddon(AddonData(name="Transfer", price=Decimal("300")), 1)]
        assert totalize(rooms, addons, Decimal("50")) == totalize(rooms, addons, Decimal("50"))

    def test_no_rooms(self):
        totals = totalize([], [])
        assert totals.room_total == Decimal("0")
        assert totals.grand_total == Decimal("0")
        assert totals.is_estimate is False


class TestEstimatedRooms:
    def test_estimate_marks_totals(self):
        estimate = estimate_quote(Decimal("1000"), date(2026, 5, 1), date(2026, 5, 3), "ZAR")
        totals = totalize(
            [RoomQuoteSelection(_quote("1500"), guest_count=2), RoomQuoteSelection(estimate, guest_count=2)],
            [],
        )
        assert totals.room_total == Decimal("3500")
        assert totals.is_estimate is True

    def test_full_quotes_are_not_estimates(self):
        totals = totalize([RoomQuoteSelection(_quote("1500"), guest_count=2)], [])
        assert totals.is_estimate is False
