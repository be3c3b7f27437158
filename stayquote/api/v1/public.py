"""Guest-facing API — stay pricing, room add-ons, checkout quotes and bookings.

No authentication: the tenant comes from the URL. Every price the guest is
charged is recomputed here from stored rooms, rates and add-ons.
"""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayquote.api.deps import get_db, quote_error_to_http
from stayquote.config import settings
from stayquote.models.addon import Addon
from stayquote.models.booking import Booking
from stayquote.models.room import Room
from stayquote.pricing import QuoteError, StayQuote, StayRequest
from stayquote.schemas.addon import PublicAddonResponse
from stayquote.schemas.booking import BookingCreate, BookingResponse
from stayquote.schemas.pricing import (
    AddonChargeResponse,
    CheckoutQuoteRequest,
    CheckoutQuoteResponse,
    NightPrice,
    RoomPricingResponse,
    RoomQuoteResponse,
)
from stayquote.services.pricing_service import (
    CheckoutQuote,
    generate_booking_reference,
    load_room,
    quote_checkout,
    quote_room,
    verify_submitted_total,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/public", tags=["public"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nights(quote: StayQuote) -> list[NightPrice]:
    return [NightPrice(date=line.date, price=line.price, rate_name=line.rate_name) for line in quote.nights]


def _checkout_response(checkout: CheckoutQuote) -> CheckoutQuoteResponse:
    rooms = [
        RoomQuoteResponse(
            room_id=result.room.id,
            room_name=result.room.name,
            adults=result.stay.adults,
            children=result.stay.children,
            nights=_nights(result.quote),
            subtotal=result.quote.subtotal,
            currency=result.quote.currency,
            night_count=result.quote.night_count,
            adjusted_total=result.adjusted_total,
            total=result.selection.effective_total,
        )
        for result in checkout.rooms
    ]
    addons = [
        AddonChargeResponse(
            addon_id=line.addon.id,
            name=line.addon.name,
            pricing_type=line.addon.pricing_type,
            unit_price=line.addon.price,
            quantity=line.quantity,
            charge=line.charge,
        )
        for line in checkout.addons
    ]
    totals = checkout.totals
    return CheckoutQuoteResponse(
        rooms=rooms,
        addons=addons,
        night_count=checkout.night_count,
        guest_count=checkout.guest_count,
        room_total=totals.room_total,
        addons_total=totals.addons_total,
        discount_amount=totals.discount_amount,
        grand_total=totals.grand_total,
        currency=checkout.currency,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/{tenant_id}/rooms/{room_id}/pricing",
    response_model=RoomPricingResponse,
    summary="Quote a room for a date range",
)
async def get_room_pricing(
    tenant_id: uuid.UUID,
    room_id: uuid.UUID,
    check_in: date = Query(..., description="Arrival date"),
    check_out: date = Query(..., description="Departure date (exclusive)"),
    adults: int = Query(1, ge=0),
    children: int = Query(0, ge=0),
    children_ages: list[int] = Query([], description="One age per child, repeat the parameter"),
    db: AsyncSession = Depends(get_db),
) -> RoomPricingResponse:
    """Per-night itemised quote for one room.

    Fails with 404 (room not found), 403 (room of another tenant), 422
    (``check_out`` not after ``check_in``) or 409 (room inactive).
    """
    stay = StayRequest(
        check_in=check_in,
        check_out=check_out,
        adults=adults,
        children=children,
        children_ages=tuple(children_ages),
    )
    try:
        room, quote = await quote_room(db, tenant_id, room_id, stay)
    except QuoteError as exc:
        raise quote_error_to_http(exc) from None

    return RoomPricingResponse(
        room_name=room.name,
        nights=_nights(quote),
        subtotal=quote.subtotal,
        currency=quote.currency,
        night_count=quote.night_count,
    )


@router.get(
    "/{tenant_id}/rooms/{room_id}/addons",
    response_model=list[PublicAddonResponse],
    summary="Add-ons offered with a room",
)
async def get_room_addons(
    tenant_id: uuid.UUID,
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[Addon]:
    """Active add-ons available for the room, cheapest first."""
    try:
        room: Room = await load_room(db, tenant_id, room_id)
    except QuoteError as exc:
        raise quote_error_to_http(exc) from None

    result = await db.execute(
        select(Addon)
        .where(Addon.tenant_id == tenant_id, Addon.is_active.is_(True))
        .order_by(Addon.price.asc(), Addon.name.asc())
    )
    return [addon for addon in result.scalars().all() if addon.is_available_for(room.id)]


@router.post(
    "/{tenant_id}/checkout/quote",
    response_model=CheckoutQuoteResponse,
    summary="Price a full checkout selection",
)
async def checkout_quote(
    tenant_id: uuid.UUID,
    body: CheckoutQuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> CheckoutQuoteResponse:
    """Re-derive room, add-on and grand totals for the current checkout state.

    Call again whenever dates, rooms, guests, add-ons or the discount change;
    nothing from a previous call is reused.
    """
    try:
        checkout = await quote_checkout(
            db,
            tenant_id,
            body,
            adjusted_totals=[room.adjusted_total for room in body.rooms],
            discount_amount=body.discount_amount,
        )
    except QuoteError as exc:
        raise quote_error_to_http(exc) from None
    return _checkout_response(checkout)


@router.post(
    "/{tenant_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking",
)
async def create_booking(
    tenant_id: uuid.UUID,
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Create a pending booking after re-quoting it on the server.

    A ``total_amount`` that differs from the server quote by more than the
    configured tolerance is rejected with 409, so a tampered client price
    never reaches storage. The quote is built without any price overrides.
    """
    try:
        checkout = await quote_checkout(db, tenant_id, body)
        verify_submitted_total(body.total_amount, checkout.totals.grand_total, settings.quote_tolerance)
    except QuoteError as exc:
        raise quote_error_to_http(exc) from None

    totals = checkout.totals
    booking = Booking(
        tenant_id=tenant_id,
        reference=generate_booking_reference(),
        guest_name=body.guest_name,
        guest_email=body.guest_email,
        guest_phone=body.guest_phone,
        check_in=body.check_in,
        check_out=body.check_out,
        rooms=[
            {
                "room_id": str(result.room.id),
                "room_name": result.room.name,
                "adults": result.stay.adults,
                "children": result.stay.children,
                "children_ages": list(result.stay.children_ages),
                "subtotal": str(result.quote.subtotal),
                "total": str(result.selection.effective_total),
            }
            for result in checkout.rooms
        ],
        addons=[
            {
                "addon_id": str(line.addon.id),
                "name": line.addon.name,
                "pricing_type": line.addon.pricing_type,
                "quantity": line.quantity,
                "charge": str(line.charge),
            }
            for line in checkout.addons
        ],
        special_requests=body.special_requests,
        room_total=totals.room_total,
        addons_total=totals.addons_total,
        discount_amount=totals.discount_amount,
        total_amount=totals.grand_total,
        currency=checkout.currency,
        status="pending",
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info("Created booking %s for tenant %s: %s %s", booking.reference, tenant_id, booking.total_amount, booking.currency)
    return booking


@router.get(
    "/{tenant_id}/bookings/{reference}",
    response_model=BookingResponse,
    summary="Look up a booking by reference",
)
async def get_booking(
    tenant_id: uuid.UUID,
    reference: str,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    result = await db.execute(select(Booking).where(Booking.tenant_id == tenant_id, Booking.reference == reference))
    booking = result.scalar_one_or_none()

    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking
