"""Unit tests for the per-night price of each pricing mode."""

from decimal import Decimal

import pytest

from stayquote.pricing import GuestClassification, price_for_night


def _guests(adults: int = 1, children: int = 0, free: int = 0, promoted: int = 0) -> GuestClassification:
    return GuestClassification(
        paying_adults=adults,
        paying_children=children,
        free_children=free,
        children_counted_as_adults=promoted,
    )


# ---------------------------------------------------------------------------
# per_unit
# ---------------------------------------------------------------------------


class TestPerUnit:
    """Flat nightly rate whoever stays."""

    @pytest.mark.parametrize(
        "guests",
        [_guests(1), _guests(2), _guests(4, 3), _guests(0, 2), _guests(2, 0, free=2)],
    )
    def test_independent_of_guests(self, guests):
        price = price_for_night("per_unit", Decimal("1000"), Decimal("200"), Decimal("100"), guests)
        assert price == Decimal("1000")


# ---------------------------------------------------------------------------
# per_person
# ---------------------------------------------------------------------------


class TestPerPerson:
    """Every paying guest pays."""

    def test_each_adult_pays_full_rate(self):
        assert price_for_night("per_person", Decimal("500"), None, None, _guests(3)) == Decimal("1500")

    def test_children_pay_child_price(self):
        price = price_for_night("per_person", Decimal("500"), None, Decimal("200"), _guests(2, 2))
        assert price == Decimal("1400")

    def test_children_pay_nightly_rate_without_child_price(self):
        price = price_for_night("per_person", Decimal("500"), None, None, _guests(1, 1))
        assert price == Decimal("1000")

    def test_free_children_add_nothing(self):
        with_free = price_for_night("per_person", Decimal("500"), None, Decimal("200"), _guests(2, 0, free=3))
        without = price_for_night("per_person", Decimal("500"), None, Decimal("200"), _guests(2))
        assert with_free == without == Decimal("1000")

    def test_additional_person_rate_is_ignored(self):
        price = price_for_night("per_person", Decimal("500"), Decimal("50"), None, _guests(2))
        assert price == Decimal("1000")


# ---------------------------------------------------------------------------
# per_person_sharing
# ---------------------------------------------------------------------------


class TestPerPersonSharing:
    """Nightly rate for the first adult plus extra-person charges."""

    @pytest.mark.parametrize("adults", [1, 2, 3, 6])
    def test_additive_in_adults(self, adults):
        price = price_for_night("per_person_sharing", Decimal("800"), Decimal("200"), None, _guests(adults))
        assert price == Decimal("800") + Decimal("200") * (adults - 1)

    def test_children_pay_child_price(self):
        price = price_for_night("per_person_sharing", Decimal("800"), Decimal("200"), Decimal("100"), _guests(2, 2))
        assert price == Decimal("1200")

    def test_children_fall_back_to_additional_rate(self):
        price = price_for_night("per_person_sharing", Decimal("800"), Decimal("200"), None, _guests(1, 1))
        assert price == Decimal("1000")

    def test_missing_additional_rate_charges_nightly_rate(self):
        price = price_for_night("per_person_sharing", Decimal("800"), None, None, _guests(2))
        assert price == Decimal("1600")

    def test_free_children_add_nothing(self):
        price = price_for_night("per_person_sharing", Decimal("800"), Decimal("200"), Decimal("100"), _guests(1, 0, free=2))
        assert price == Decimal("800")

    def test_no_rounding(self):
        price = price_for_night("per_person_sharing", Decimal("99.995"), Decimal("0.333"), None, _guests(4))
        assert price == Decimal("100.994")
