"""Addon charges for the four pricing bases."""

from collections.abc import Iterable
from decimal import Decimal

from stayquote.pricing.types import ZERO, AddonData, SelectedAddon


def clamp_quantity(addon: AddonData, quantity: int) -> int:
    """Clamp a requested quantity into ``[1, addon.max_quantity]``."""
    return max(1, min(quantity, max(1, addon.max_quantity)))


def addon_charge(addon: AddonData, quantity: int, night_count: int, guest_count: int) -> Decimal:
    """Charge for ``quantity`` units of ``addon``.

    ``guest_count`` must be scoped by the caller: the room's guests for a
    single-room stay, all guests for a multi-room checkout. Quantity bounds are
    the caller's job; a non-positive quantity charges nothing.
    """
    if quantity <= 0:
        return ZERO

    nights = max(0, night_count)
    guests = max(0, guest_count)
    charge = addon.price * quantity

    if addon.pricing_type == "per_night":
        return charge * nights
    if addon.pricing_type == "per_guest":
        return charge * guests
    if addon.pricing_type == "per_guest_per_night":
        return charge * guests * nights
    return charge


def addons_total(selected: Iterable[SelectedAddon], night_count: int, guest_count: int) -> Decimal:
    return sum(
        (addon_charge(item.addon, item.quantity, night_count, guest_count) for item in selected),
        ZERO,
    )
