"""Pricing service — loads rooms, rates and addons and runs the quote engine.

The engine in ``stayquote.pricing`` is pure; everything that touches the
database, and every validation failure a caller must see, lives here.
"""

import logging
import secrets
import string
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayquote.models.addon import Addon
from stayquote.models.room import Room
from stayquote.models.seasonal_rate import SeasonalRate
from stayquote.pricing import (
    CheckoutTotals,
    CheckoutValidationError,
    InvalidDateRangeError,
    QuoteMismatchError,
    RoomInactiveError,
    RoomNotFoundError,
    RoomQuoteSelection,
    SeasonalRateData,
    SelectedAddon,
    StayQuote,
    StayRequest,
    TenantMismatchError,
    addon_charge,
    build_quote,
    clamp_quantity,
    totalize,
)
from stayquote.schemas.pricing import CheckoutSelection

logger = logging.getLogger(__name__)

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits
_BASE36 = string.digits + string.ascii_uppercase


@dataclass(frozen=True)
class RoomQuoteResult:
    room: Room
    stay: StayRequest
    quote: StayQuote
    adjusted_total: Decimal | None = None

    @property
    def selection(self) -> RoomQuoteSelection:
        return RoomQuoteSelection(
            quote=self.quote,
            adjusted_total=self.adjusted_total,
            guest_count=self.stay.guest_count,
        )


@dataclass(frozen=True)
class AddonLine:
    addon: Addon
    quantity: int
    charge: Decimal


@dataclass(frozen=True)
class CheckoutQuote:
    rooms: list[RoomQuoteResult]
    addons: list[AddonLine]
    totals: CheckoutTotals
    night_count: int
    guest_count: int
    currency: str


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


async def load_room(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    room_id: uuid.UUID,
    *,
    require_active: bool = True,
) -> Room:
    """Fetch a room and check it belongs to ``tenant_id``.

    Raises:
        RoomNotFoundError: No room with this id exists.
        TenantMismatchError: The room belongs to another tenant.
        RoomInactiveError: ``require_active`` is set and the room is inactive.
    """
    result = await db.execute(select(Room).where(Room.id == room_id))
    room = result.scalar_one_or_none()

    if room is None:
        raise RoomNotFoundError(room_id)
    if room.tenant_id != tenant_id:
        raise TenantMismatchError(room_id, tenant_id)
    if require_active and not room.is_active:
        raise RoomInactiveError(room_id)
    return room


async def load_seasonal_rates(
    db: AsyncSession,
    room: Room,
    start: date,
    end: date,
) -> list[SeasonalRateData]:
    """Load the room's seasonal rates overlapping ``start``..``end`` (inclusive).

    Ordered by priority (highest first), then creation order, so that the
    resolver's "first wins" tie-break picks the earliest-created rate.
    """
    result = await db.execute(
        select(SeasonalRate)
        .where(
            SeasonalRate.room_id == room.id,
            SeasonalRate.tenant_id == room.tenant_id,
            SeasonalRate.start_date <= end,
            SeasonalRate.end_date >= start,
        )
        .order_by(SeasonalRate.priority.desc(), SeasonalRate.created_at.asc(), SeasonalRate.id.asc())
    )
    return [rate.to_rate_data() for rate in result.scalars().all()]


async def find_overlapping_rate(
    db: AsyncSession,
    room_id: uuid.UUID,
    start: date,
    end: date,
    priority: int,
    exclude_rate_id: uuid.UUID | None = None,
) -> SeasonalRate | None:
    """Return an existing rate of the room overlapping ``start``..``end`` at the same priority."""
    query = select(SeasonalRate).where(
        SeasonalRate.room_id == room_id,
        SeasonalRate.priority == priority,
        SeasonalRate.start_date <= end,
        SeasonalRate.end_date >= start,
    )
    if exclude_rate_id is not None:
        query = query.where(SeasonalRate.id != exclude_rate_id)

    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Quoting
# ---------------------------------------------------------------------------


def _check_date_range(check_in: date, check_out: date) -> None:
    if check_out <= check_in:
        raise InvalidDateRangeError(check_in, check_out)


async def quote_room(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    room_id: uuid.UUID,
    stay: StayRequest,
) -> tuple[Room, StayQuote]:
    """Build the authoritative quote for one room.

    Raises one of the ``QuoteError`` subclasses when the request cannot be
    quoted; a zero-night stay is rejected here rather than quoted at zero.
    """
    _check_date_range(stay.check_in, stay.check_out)
    room = await load_room(db, tenant_id, room_id)
    rates = await load_seasonal_rates(db, room, stay.check_in, stay.check_out)

    quote = build_quote(room.to_pricing_config(), rates, stay)
    logger.info(
        "Quoted room %s for %d nights: %s %s",
        room.id,
        quote.night_count,
        quote.subtotal,
        quote.currency,
    )
    return room, quote


async def _load_addons(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    addon_ids: Sequence[uuid.UUID],
) -> dict[uuid.UUID, Addon]:
    if not addon_ids:
        return {}
    result = await db.execute(
        select(Addon).where(
            Addon.id.in_(set(addon_ids)),
            Addon.tenant_id == tenant_id,
            Addon.is_active.is_(True),
        )
    )
    return {addon.id: addon for addon in result.scalars().all()}


async def quote_checkout(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    request: CheckoutSelection,
    *,
    adjusted_totals: Sequence[Decimal | None] = (),
    discount_amount: Decimal = Decimal("0"),
) -> CheckoutQuote:
    """Re-derive a whole checkout: every room's quote, addon charges and totals.

    ``adjusted_totals`` (one per room, by position) and ``discount_amount`` are
    manual price overrides; booking creation never passes them. Nothing is
    cached between calls, so pricing the same request twice gives the same
    result.
    """
    _check_date_range(request.check_in, request.check_out)

    room_results: list[RoomQuoteResult] = []
    for index, selected in enumerate(request.rooms):
        stay = StayRequest(
            check_in=request.check_in,
            check_out=request.check_out,
            adults=selected.adults,
            children=selected.children,
            children_ages=tuple(selected.children_ages),
        )
        room, quote = await quote_room(db, tenant_id, selected.room_id, stay)
        if stay.guest_count > room.max_guests:
            raise CheckoutValidationError(f"{room.name} allows a maximum of {room.max_guests} guests")
        adjusted_total = adjusted_totals[index] if index < len(adjusted_totals) else None
        room_results.append(RoomQuoteResult(room=room, stay=stay, quote=quote, adjusted_total=adjusted_total))

    currencies = {result.quote.currency for result in room_results}
    if len(currencies) > 1:
        raise CheckoutValidationError("All rooms in one checkout must share a currency")
    currency = currencies.pop()

    addons_by_id = await _load_addons(db, tenant_id, [item.addon_id for item in request.addons])
    room_ids = [result.room.id for result in room_results]

    selected_addons: list[SelectedAddon] = []
    picked: list[tuple[Addon, int]] = []
    for item in request.addons:
        addon = addons_by_id.get(item.addon_id)
        if addon is None or not any(addon.is_available_for(room_id) for room_id in room_ids):
            raise CheckoutValidationError(f"Add-on {item.addon_id} is not available for this stay")
        if item.quantity <= 0:
            continue
        data = addon.to_addon_data()
        quantity = clamp_quantity(data, item.quantity)
        selected_addons.append(SelectedAddon(addon=data, quantity=quantity))
        picked.append((addon, quantity))

    selections = [result.selection for result in room_results]
    totals = totalize(selections, selected_addons, discount_amount)

    night_count = max(result.quote.night_count for result in room_results)
    guest_count = sum(result.stay.guest_count for result in room_results)
    addon_lines = [
        AddonLine(
            addon=addon,
            quantity=quantity,
            charge=addon_charge(selected.addon, quantity, night_count, guest_count),
        )
        for (addon, quantity), selected in zip(picked, selected_addons)
    ]

    return CheckoutQuote(
        rooms=room_results,
        addons=addon_lines,
        totals=totals,
        night_count=night_count,
        guest_count=guest_count,
        currency=currency,
    )


# ---------------------------------------------------------------------------
# Booking support
# ---------------------------------------------------------------------------


def verify_submitted_total(submitted: Decimal, computed: Decimal, tolerance: Decimal) -> None:
    """Reject a client total that drifted from the server quote by more than ``tolerance``."""
    if abs(submitted - computed) > tolerance:
        logger.warning("Rejecting booking total %s; server quote is %s", submitted, computed)
        raise QuoteMismatchError(submitted, computed)


def generate_booking_reference(now: datetime | None = None) -> str:
    """Return a reference like ``BK-LZ3K9A1Q-7F2X`` (base36 timestamp + random suffix)."""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    stamp = ""
    while millis:
        millis, digit = divmod(millis, 36)
        stamp = _BASE36[digit] + stamp
    suffix = "".join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(4))
    return f"BK-{stamp or '0'}-{suffix}"
