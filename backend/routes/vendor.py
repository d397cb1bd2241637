"""
Vendor endpoints — store state, working hours, pack settings, profile,
plus the public vendor directory.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deps import get_db, require_vendor
from domain.errors import NotFoundError
from domain.responses import success_response
from models import (
    UpdatePackSettingsRequest,
    UpdateWorkingHoursRequest,
    VendorOut,
    VendorProfileUpdate,
    VendorPublicOut,
    WorkingHourOut,
    dump,
)
from services import vendor_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendor", tags=["vendor"])


# ── Authenticated vendor actions ────────────────────────────────────

@router.patch("/open-store")
async def open_store(
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    vendor = await vendor_service.open_store(db, vendor_id=vendor_id)
    await db.commit()
    return success_response(data=dump(VendorOut, vendor))


@router.patch("/close-store")
async def close_store(
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    vendor = await vendor_service.close_store(db, vendor_id=vendor_id)
    await db.commit()
    return success_response(data=dump(VendorOut, vendor))


@router.patch("/update-pack-settings")
async def update_pack_settings(
    request: UpdatePackSettingsRequest,
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    vendor = await vendor_service.update_pack_settings(
        db,
        vendor_id=vendor_id,
        limit=request.limit,
        price=request.price,
    )
    await db.commit()
    return success_response(data=dump(VendorOut, vendor))


@router.patch("/update-working-hours")
async def update_working_hours(
    request: UpdateWorkingHoursRequest,
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    hours = await vendor_service.update_working_hours(
        db,
        vendor_id=vendor_id,
        day=request.day,
        opening_time=request.opening_time,
        closing_time=request.closing_time,
        is_active=request.is_active,
    )
    await db.commit()
    return success_response(data=[dump(WorkingHourOut, h) for h in hours])


@router.patch("/update-profile")
async def update_vendor_profile(
    request: VendorProfileUpdate,
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    result = await vendor_service.update_vendor_profile(db, vendor_id=vendor_id, updates=request)
    await db.commit()
    return success_response(
        data={
            "message": result["message"],
            "vendor": dump(VendorOut, result["vendor"]),
        }
    )


# ── Public directory ────────────────────────────────────────────────

@router.get("")
async def list_vendors(db: AsyncSession = Depends(get_db)):
    vendors = await vendor_service.list_vendors(db)
    return success_response(
        data=[dump(VendorOut, v) for v in vendors],
        meta={"total": len(vendors)},
    )


@router.get("/name/{slug}")
async def get_vendor_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    vendor = await vendor_service.find_by_slug(db, slug)
    return success_response(data=dump(VendorPublicOut, vendor))


@router.get("/{vendor_id}")
async def get_vendor(vendor_id: int, db: AsyncSession = Depends(get_db)):
    vendor = await vendor_service.find_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)
    return success_response(data=dump(VendorOut, vendor))
