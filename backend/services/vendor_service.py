"""
Vendor service — directory reads and operating-state changes.

Operating state covers the store-open flag, working hours, pack settings
and the public profile. Every mutation takes the vendor id resolved from the
caller's access token.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Vendor, VendorWorkingHour, utcnow
from domain.constants import DEFAULT_CLOSING_TIME, DEFAULT_OPENING_TIME, WEEK_DAYS
from domain.errors import ConflictError, NotFoundError, ValidationError
from models import VendorProfileUpdate

logger = logging.getLogger(__name__)


# ── Directory ───────────────────────────────────────────────────────

async def create_vendor(
    db: AsyncSession,
    *,
    restaurant_name: str,
    slug: str,
    email: str | None = None,
    is_store_open: bool = False,
    **profile,
) -> Vendor:
    """Create a vendor with one working-hours entry per weekday."""
    vendor = Vendor(
        restaurant_name=restaurant_name,
        slug=slug,
        email=email,
        is_store_open=is_store_open,
        working_hours=[
            VendorWorkingHour(
                day=day,
                opening_time=DEFAULT_OPENING_TIME,
                closing_time=DEFAULT_CLOSING_TIME,
                is_active=True,
                position=position,
            )
            for position, day in enumerate(WEEK_DAYS)
        ],
        **profile,
    )
    db.add(vendor)
    await db.flush()
    return vendor


async def find_by_id(db: AsyncSession, vendor_id: int) -> Vendor | None:
    return await db.get(Vendor, vendor_id)


async def update(db: AsyncSession, vendor_id: int, **fields) -> Vendor | None:
    """Apply column updates to a vendor. Returns None if the vendor doesn't exist."""
    vendor = await find_by_id(db, vendor_id)
    if not vendor:
        return None
    for name, value in fields.items():
        setattr(vendor, name, value)
    vendor.updated_at = utcnow()
    await db.flush()
    return vendor


async def list_vendors(db: AsyncSession) -> list[Vendor]:
    res = await db.execute(select(Vendor).order_by(Vendor.created_at.desc()))
    return list(res.scalars().all())


async def find_by_slug(db: AsyncSession, slug: str) -> Vendor:
    res = await db.execute(select(Vendor).where(Vendor.slug == slug))
    vendor = res.scalar_one_or_none()
    if not vendor:
        raise NotFoundError("Vendor", f"slug '{slug}'")
    return vendor


# ── Store open / close ──────────────────────────────────────────────

async def open_store(db: AsyncSession, *, vendor_id: int) -> Vendor:
    """Idempotent: opening an open store is not an error."""
    vendor = await update(db, vendor_id, is_store_open=True)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)
    logger.info(f"Vendor {vendor_id} opened store")
    return vendor


async def close_store(db: AsyncSession, *, vendor_id: int) -> Vendor:
    """Idempotent: closing a closed store is not an error."""
    vendor = await update(db, vendor_id, is_store_open=False)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)
    logger.info(f"Vendor {vendor_id} closed store")
    return vendor


# ── Pack settings ───────────────────────────────────────────────────

async def update_pack_settings(db: AsyncSession, *, vendor_id: int, limit: int, price: float) -> Vendor:
    """Replace both pack settings at once (no partial merge)."""
    vendor = await update(db, vendor_id, pack_limit=limit, pack_price=price)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)
    return vendor


# ── Working hours ───────────────────────────────────────────────────

async def update_working_hours(
    db: AsyncSession,
    *,
    vendor_id: int,
    day: str,
    opening_time: str | None = None,
    closing_time: str | None = None,
    is_active: bool | None = None,
) -> list[VendorWorkingHour]:
    """
    Patch the entry for `day` (case-insensitive). Only provided fields change.

    An unknown day is rejected; entries are never appended.
    """
    vendor = await find_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)

    wanted = day.strip().lower()
    entry = next((h for h in vendor.working_hours if h.day.lower() == wanted), None)
    if entry is None:
        raise ValidationError(f"Invalid day: {day}", details={"day": day})

    if opening_time is not None:
        entry.opening_time = opening_time
    if closing_time is not None:
        entry.closing_time = closing_time
    if is_active is not None:
        entry.is_active = is_active

    vendor.updated_at = utcnow()
    await db.flush()
    return list(vendor.working_hours)


# ── Profile ─────────────────────────────────────────────────────────

async def _ensure_unique(db: AsyncSession, vendor_id: int, column, value, label: str) -> None:
    res = await db.execute(select(Vendor.id).where(column == value, Vendor.id != vendor_id))
    if res.scalar_one_or_none() is not None:
        raise ConflictError(f"{label} '{value}' is already taken")


async def update_vendor_profile(db: AsyncSession, *, vendor_id: int, updates: VendorProfileUpdate) -> dict:
    """Overlay the fields explicitly set on `updates`; the model is the allowlist."""
    vendor = await find_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)

    fields = updates.model_dump(exclude_unset=True)
    if fields.get("slug") is not None:
        await _ensure_unique(db, vendor_id, Vendor.slug, fields["slug"], "Slug")
    if fields.get("email") is not None:
        await _ensure_unique(db, vendor_id, Vendor.email, fields["email"], "Email")

    vendor = await update(db, vendor_id, **fields)
    logger.info(f"Vendor {vendor_id} profile updated: {sorted(fields)}")
    return {
        "message": "Vendor profile updated successfully",
        "vendor": vendor,
    }
