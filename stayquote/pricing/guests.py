"""Guest composition classifier.

Splits the raw adults / children / children ages of a stay into the three
billing classes the per-night calculator works with.
"""

import logging
from collections.abc import Sequence

from stayquote.pricing.types import GuestClassification, RoomPricingConfig

logger = logging.getLogger(__name__)


def classify_guests(
    config: RoomPricingConfig,
    adults: int,
    children: int,
    children_ages: Sequence[int] = (),
) -> GuestClassification:
    """Classify guests into paying adults, paying children and free children.

    A child younger than ``child_free_until_age`` is free. A child aged
    ``child_age_limit`` or older is billed as an adult. When the ages do not
    line up with the ``children`` count nothing can be classified by age, so
    every child is billed as a paying child.
    """
    adults = max(0, adults)
    children = max(0, children)

    if len(children_ages) != children:
        logger.debug(
            "children_ages has %d entries for %d children; billing all as paying children",
            len(children_ages),
            children,
        )
        return GuestClassification(
            paying_adults=adults,
            paying_children=children,
            free_children=0,
            children_counted_as_adults=0,
        )

    free = 0
    as_adults = 0
    paying = 0
    for age in children_ages:
        if config.child_free_until_age is not None and age < config.child_free_until_age:
            free += 1
        elif age >= config.child_age_limit:
            as_adults += 1
        else:
            paying += 1

    return GuestClassification(
        paying_adults=adults + as_adults,
        paying_children=paying,
        free_children=free,
        children_counted_as_adults=as_adults,
    )
