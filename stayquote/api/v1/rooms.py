"""Rooms API — room pricing configuration, seasonal rates and effective prices.

Tenant rule: every query filters on the tenant from the ``X-Tenant-ID``
header; a room of another tenant is reported as not found.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stayquote.api.deps import get_db, get_tenant_id
from stayquote.models.room import Room
from stayquote.models.seasonal_rate import SeasonalRate
from stayquote.pricing import SeasonalRateData, iter_stay_nights, resolve_nightly_rate
from stayquote.schemas.common import MessageResponse
from stayquote.schemas.pricing import (
    EffectivePriceRangeResponse,
    EffectivePriceResponse,
    SeasonalRateSummary,
)
from stayquote.schemas.room import RoomCreate, RoomListResponse, RoomResponse, RoomUpdate
from stayquote.schemas.seasonal_rate import (
    SeasonalRateCreate,
    SeasonalRateResponse,
    SeasonalRateUpdate,
)
from stayquote.services.pricing_service import find_overlapping_rate, load_seasonal_rates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_room(room_id: uuid.UUID, tenant_id: uuid.UUID, db: AsyncSession) -> Room:
    """Fetch a room of the tenant or raise ``HTTPException 404``."""
    result = await db.execute(select(Room).where(Room.id == room_id, Room.tenant_id == tenant_id))
    room = result.scalar_one_or_none()

    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found",
        )
    return room


async def _get_rate(rate_id: uuid.UUID, room: Room, db: AsyncSession) -> SeasonalRate:
    result = await db.execute(
        select(SeasonalRate).where(SeasonalRate.id == rate_id, SeasonalRate.room_id == room.id)
    )
    rate = result.scalar_one_or_none()

    if rate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Seasonal rate not found",
        )
    return rate


async def _check_rate_overlap(
    db: AsyncSession,
    room_id: uuid.UUID,
    start: date,
    end: date,
    priority: int,
    exclude_rate_id: uuid.UUID | None = None,
) -> None:
    """Raise 409 if an equal-priority rate already covers part of the range."""
    clash = await find_overlapping_rate(db, room_id, start, end, priority, exclude_rate_id)
    if clash is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"Overlaps seasonal rate '{clash.name}' ({clash.start_date} to {clash.end_date}) "
                f"with the same priority {priority}; use a different priority or date range"
            ),
        )


def _effective_price(room: Room, rates: Sequence[SeasonalRateData], night: date) -> EffectivePriceResponse:
    resolved = resolve_nightly_rate(room.to_pricing_config(), rates, night)
    seasonal = None
    if resolved.rate_name is not None:
        seasonal = SeasonalRateSummary(
            id=uuid.UUID(resolved.rate_id),
            name=resolved.rate_name,
            price_per_night=resolved.price,
        )
    return EffectivePriceResponse(
        date=night,
        base_price=room.base_price_per_night,
        effective_price=resolved.price,
        seasonal_rate=seasonal,
        currency=room.currency,
    )


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new room",
)
async def create_room(
    body: RoomCreate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> RoomResponse:
    """Create a room with its pricing configuration."""
    room = Room(tenant_id=tenant_id, **body.model_dump())
    db.add(room)
    await db.flush()
    await db.refresh(room)
    logger.info("Created room %s (%s) for tenant %s", room.id, room.pricing_mode, tenant_id)
    return RoomResponse.model_validate(room)


@router.get(
    "",
    response_model=RoomListResponse,
    summary="List the tenant's rooms",
)
async def list_rooms(
    is_active: bool | None = Query(None, description="Filter by active flag"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> RoomListResponse:
    """Return a paginated list of rooms, newest first."""
    filters = [Room.tenant_id == tenant_id]
    if is_active is not None:
        filters.append(Room.is_active.is_(is_active))

    total_result = await db.execute(select(func.count()).select_from(Room).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(select(Room).where(*filters).order_by(Room.created_at.desc()).offset(skip).limit(limit))
    items = list(result.scalars().all())

    return RoomListResponse(
        items=[RoomResponse.model_validate(r) for r in items],
        total=total,
    )


@router.get(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Get a room by ID",
)
async def get_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> RoomResponse:
    room = await _get_room(room_id, tenant_id, db)
    return RoomResponse.model_validate(room)


@router.put(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Update a room",
)
async def update_room(
    room_id: uuid.UUID,
    body: RoomUpdate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> RoomResponse:
    """Partially update a room.

    The merged configuration is re-validated so an update cannot leave a
    sharing room without an extra-person rate.
    """
    room = await _get_room(room_id, tenant_id, db)
    update_data = body.model_dump(exclude_unset=True)

    merged = RoomResponse.model_validate(room).model_dump(include=set(RoomCreate.model_fields))
    merged.update(update_data)
    try:
        RoomCreate.model_validate(merged)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from None

    for field, value in update_data.items():
        setattr(room, field, value)

    db.add(room)
    await db.flush()
    await db.refresh(room)
    return RoomResponse.model_validate(room)


@router.delete(
    "/{room_id}",
    response_model=MessageResponse,
    summary="Delete a room",
)
async def delete_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> MessageResponse:
    """Delete a room and cascade-delete its seasonal rates."""
    room = await _get_room(room_id, tenant_id, db)
    await db.delete(room)
    await db.flush()
    logger.info("Deleted room %s for tenant %s", room_id, tenant_id)
    return MessageResponse(message="Room deleted")


# ---------------------------------------------------------------------------
# Seasonal rates
# ---------------------------------------------------------------------------


@router.get(
    "/{room_id}/rates",
    response_model=list[SeasonalRateResponse],
    summary="List a room's seasonal rates",
)
async def list_rates(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> list[SeasonalRate]:
    """Return the room's seasonal rates ordered by start date."""
    room = await _get_room(room_id, tenant_id, db)
    result = await db.execute(
        select(SeasonalRate)
        .where(SeasonalRate.room_id == room.id)
        .order_by(SeasonalRate.start_date.asc(), SeasonalRate.priority.desc())
    )
    return list(result.scalars().all())


@router.post(
    "/{room_id}/rates",
    response_model=SeasonalRateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a seasonal rate",
)
async def create_rate(
    room_id: uuid.UUID,
    body: SeasonalRateCreate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> SeasonalRate:
    """Create a seasonal rate.

    Rejects a rate overlapping another rate of the same priority, since the
    quote engine could then only pick between them by creation order.
    """
    room = await _get_room(room_id, tenant_id, db)
    await _check_rate_overlap(db, room.id, body.start_date, body.end_date, body.priority)

    rate = SeasonalRate(tenant_id=tenant_id, room_id=room.id, **body.model_dump())
    db.add(rate)
    await db.flush()
    await db.refresh(rate)
    logger.info(
        "Created seasonal rate %r for room %s (%s..%s, priority %d)",
        rate.name,
        room.id,
        rate.start_date,
        rate.end_date,
        rate.priority,
    )
    return rate


@router.put(
    "/{room_id}/rates/{rate_id}",
    response_model=SeasonalRateResponse,
    summary="Update a seasonal rate",
)
async def update_rate(
    room_id: uuid.UUID,
    rate_id: uuid.UUID,
    body: SeasonalRateUpdate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> SeasonalRate:
    room = await _get_room(room_id, tenant_id, db)
    rate = await _get_rate(rate_id, room, db)
    update_data = body.model_dump(exclude_unset=True)

    effective_start = update_data.get("start_date", rate.start_date)
    effective_end = update_data.get("end_date", rate.end_date)
    effective_priority = update_data.get("priority", rate.priority)

    if effective_end < effective_start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must be on or after start_date",
        )
    await _check_rate_overlap(
        db,
        room.id,
        effective_start,
        effective_end,
        effective_priority,
        exclude_rate_id=rate.id,
    )

    for field, value in update_data.items():
        setattr(rate, field, value)

    db.add(rate)
    await db.flush()
    await db.refresh(rate)
    return rate


@router.delete(
    "/{room_id}/rates/{rate_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a seasonal rate",
)
async def delete_rate(
    room_id: uuid.UUID,
    rate_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> None:
    room = await _get_room(room_id, tenant_id, db)
    rate = await _get_rate(rate_id, room, db)
    await db.delete(rate)
    await db.flush()
    logger.info("Deleted seasonal rate %s from room %s", rate_id, room_id)


# ---------------------------------------------------------------------------
# Effective prices
# ---------------------------------------------------------------------------


@router.get(
    "/{room_id}/price",
    response_model=EffectivePriceResponse,
    summary="Effective nightly price on one date",
)
async def get_effective_price(
    room_id: uuid.UUID,
    night: date = Query(..., alias="date", description="Calendar night to price"),
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> EffectivePriceResponse:
    """Base price of the room on ``date`` after seasonal rates, before guest pricing."""
    room = await _get_room(room_id, tenant_id, db)
    rates = await load_seasonal_rates(db, room, night, night)
    return _effective_price(room, rates, night)


@router.get(
    "/{room_id}/prices",
    response_model=EffectivePriceRangeResponse,
    summary="Effective nightly prices for a date range",
)
async def get_effective_prices(
    room_id: uuid.UUID,
    start_date: date = Query(..., description="First night"),
    end_date: date = Query(..., description="Departure date (exclusive)"),
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> EffectivePriceRangeResponse:
    """Per-night effective prices, as used by the booking wizard's calendar."""
    if end_date <= start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must be after start_date",
        )
    room = await _get_room(room_id, tenant_id, db)
    rates = await load_seasonal_rates(db, room, start_date, end_date)

    nights = [_effective_price(room, rates, night) for night in iter_stay_nights(start_date, end_date)]
    return EffectivePriceRangeResponse(
        nights=nights,
        total_amount=sum((n.effective_price for n in nights), Decimal("0")),
        currency=room.currency,
        night_count=len(nights),
    )
