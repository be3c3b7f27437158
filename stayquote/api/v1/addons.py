"""Addons CRUD API routes — tenant-scoped."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stayquote.api.deps import get_db, get_tenant_id
from stayquote.models.addon import Addon
from stayquote.schemas.addon import AddonCreate, AddonListResponse, AddonResponse, AddonUpdate
from stayquote.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/addons", tags=["addons"])


async def _get_addon(addon_id: uuid.UUID, tenant_id: uuid.UUID, db: AsyncSession) -> Addon:
    result = await db.execute(select(Addon).where(Addon.id == addon_id, Addon.tenant_id == tenant_id))
    addon = result.scalar_one_or_none()

    if addon is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Add-on not found",
        )
    return addon


@router.post(
    "",
    response_model=AddonResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new add-on",
)
async def create_addon(
    body: AddonCreate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> AddonResponse:
    data = body.model_dump()
    # JSON column: store room ids as strings
    data["available_for_rooms"] = [str(room_id) for room_id in body.available_for_rooms]

    addon = Addon(tenant_id=tenant_id, **data)
    db.add(addon)
    await db.flush()
    await db.refresh(addon)
    logger.info("Created add-on %s (%s) for tenant %s", addon.id, addon.pricing_type, tenant_id)
    return AddonResponse.model_validate(addon)


@router.get(
    "",
    response_model=AddonListResponse,
    summary="List the tenant's add-ons",
)
async def list_addons(
    is_active: bool | None = Query(None),
    addon_type: str | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive match on name"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> AddonListResponse:
    """Return paginated add-ons belonging to the tenant, newest first."""
    filters = [Addon.tenant_id == tenant_id]
    if is_active is not None:
        filters.append(Addon.is_active.is_(is_active))
    if addon_type is not None:
        filters.append(Addon.addon_type == addon_type)
    if search:
        filters.append(Addon.name.ilike(f"%{search}%"))

    total_result = await db.execute(select(func.count()).select_from(Addon).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(Addon).where(*filters).order_by(Addon.created_at.desc()).offset(skip).limit(limit)
    )
    items = list(result.scalars().all())

    return AddonListResponse(
        items=[AddonResponse.model_validate(a) for a in items],
        total=total,
    )


@router.get(
    "/{addon_id}",
    response_model=AddonResponse,
    summary="Get an add-on by ID",
)
async def get_addon(
    addon_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> AddonResponse:
    addon = await _get_addon(addon_id, tenant_id, db)
    return AddonResponse.model_validate(addon)


@router.put(
    "/{addon_id}",
    response_model=AddonResponse,
    summary="Update an add-on",
)
async def update_addon(
    addon_id: uuid.UUID,
    body: AddonUpdate,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> AddonResponse:
    """Partially update an add-on. Only explicitly set fields are changed."""
    addon = await _get_addon(addon_id, tenant_id, db)

    update_data = body.model_dump(exclude_unset=True)
    if "available_for_rooms" in update_data:
        room_ids = update_data.pop("available_for_rooms") or []
        addon.available_for_rooms = [str(room_id) for room_id in room_ids]

    for field, value in update_data.items():
        setattr(addon, field, value)

    db.add(addon)
    await db.flush()
    await db.refresh(addon)
    return AddonResponse.model_validate(addon)


@router.delete(
    "/{addon_id}",
    response_model=MessageResponse,
    summary="Delete an add-on",
)
async def delete_addon(
    addon_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
) -> MessageResponse:
    addon = await _get_addon(addon_id, tenant_id, db)
    await db.delete(addon)
    await db.flush()
    logger.info("Deleted add-on %s for tenant %s", addon_id, tenant_id)
    return MessageResponse(message="Add-on deleted")
