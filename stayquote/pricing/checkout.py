"""Checkout totalizer for multi-room, multi-night stays."""

from collections.abc import Sequence
from decimal import Decimal

from stayquote.pricing.addons import addons_total
from stayquote.pricing.types import ZERO, CheckoutTotals, RoomQuoteSelection, SelectedAddon


def totalize(
    room_quotes: Sequence[RoomQuoteSelection],
    selected_addons: Sequence[SelectedAddon],
    discount_amount: Decimal = ZERO,
    *,
    night_count: int | None = None,
    guest_count: int | None = None,
) -> CheckoutTotals:
    """Re-derive room, addon and grand totals from scratch.

    Unless given explicitly, addons are charged over the longest stay among
    the rooms and over every guest across all rooms. The grand total never
    drops below zero.
    """
    room_total = sum((selection.effective_total for selection in room_quotes), ZERO)

    if night_count is None:
        night_count = max((selection.quote.night_count for selection in room_quotes), default=0)
    if guest_count is None:
        guest_count = sum(selection.guest_count for selection in room_quotes)
    addon_sum = addons_total(selected_addons, night_count, guest_count)

    discount = discount_amount if discount_amount is not None else ZERO
    grand_total = max(ZERO, room_total + addon_sum - discount)

    return CheckoutTotals(
        room_total=room_total,
        addons_total=addon_sum,
        discount_amount=discount,
        grand_total=grand_total,
        is_estimate=any(selection.quote.is_estimate for selection in room_quotes),
    )
