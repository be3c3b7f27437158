"""Per-night price calculation for the three room pricing modes."""

from decimal import Decimal

from stayquote.pricing.types import GuestClassification, PricingMode


def price_for_night(
    mode: PricingMode,
    nightly_rate: Decimal,
    additional_person_rate: Decimal | None,
    child_price: Decimal | None,
    classification: GuestClassification,
) -> Decimal:
    """Return one night's charge. No rounding happens here.

    - ``per_unit``: the nightly rate, whoever stays.
    - ``per_person``: every paying adult pays the nightly rate, paying
      children pay ``child_price`` (or the nightly rate when unset).
    - ``per_person_sharing``: the nightly rate covers the first adult, each
      further adult pays ``additional_person_rate`` and paying children pay
      ``child_price`` (or the additional person rate when unset).

    Free children never add anything.
    """
    adults = classification.paying_adults
    children = classification.paying_children

    if mode == "per_person":
        child_rate = child_price if child_price is not None else nightly_rate
        return nightly_rate * adults + child_rate * children

    if mode == "per_person_sharing":
        # A sharing room saved without an extra-person rate charges extras at the nightly rate.
        extra_rate = additional_person_rate if additional_person_rate is not None else nightly_rate
        child_rate = child_price if child_price is not None else extra_rate
        return nightly_rate + extra_rate * max(0, adults - 1) + child_rate * children

    return nightly_rate
