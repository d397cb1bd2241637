"""
Order service — order placement and vendor order listings.

create_order validates customer → vendor → store open → items (in that order,
first failure wins), prices the basket from the live menu, and writes the
order once. The vendor listings share one query builder; vendor_id always
comes from the authenticated vendor, never from request input.
"""

import logging
import math
import random
from datetime import datetime, timezone, tzinfo
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db_models import Order, OrderItem
from domain.constants import DEFAULT_PAGE, MAX_ROW_OFFSET
from domain.enums import OrderStatus
from domain.errors import ConflictError, InvalidStateError, NotFoundError
from services import customer_service, menu_service, order_repository, vendor_service
from services.order_id import generate_order_id

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════
# Order creation
# ════════════════════════════════════════════════════════════════════

async def _next_order_id(db: AsyncSession, rng: random.Random) -> str:
    """Generate a code not yet used by any order, retrying on collision."""
    attempts = max(1, settings.order_id_max_attempts)
    for _ in range(attempts):
        candidate = generate_order_id(rng)
        if not await order_repository.order_id_exists(db, candidate):
            return candidate
        logger.warning("Order id collision on %s, regenerating", candidate)
    raise ConflictError(f"Could not allocate a unique order id after {attempts} attempts")


async def create_order(
    db: AsyncSession,
    *,
    customer_id: int,
    vendor_id: int,
    delivery_type: str,
    phone_number: str,
    items: list[dict],
    location: str | None = None,
    address: str | None = None,
    notes: str | None = None,
    rng: random.Random | None = None,
) -> Order:
    """
    items: [{menu_item_id:int, quantity:int}] in submission order.

    Nothing is added to the session until every check has passed.
    """
    customer = await customer_service.find_by_id(db, customer_id)

    vendor = await vendor_service.find_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor", vendor_id)
    if not vendor.is_store_open:
        raise InvalidStateError(
            "Vendor store is currently closed",
            details={"vendor_id": vendor_id},
        )

    # One batched lookup, then validate in submission order so the reported
    # item is always the first offending one.
    menu_items = await menu_service.find_many(db, [int(i["menu_item_id"]) for i in items])

    total_amount = 0.0
    order_items: list[OrderItem] = []
    for position, item in enumerate(items):
        menu_item_id = int(item["menu_item_id"])
        quantity = int(item["quantity"])
        menu_item = menu_items.get(menu_item_id)
        if not menu_item:
            raise NotFoundError("Menu item", menu_item_id)
        if not menu_item.is_enabled:
            raise InvalidStateError(
                f"Menu item {menu_item.name} is not available",
                details={"menu_item_id": menu_item_id},
            )
        total_amount += menu_item.price * quantity
        order_items.append(
            OrderItem(
                menu_item_id=menu_item_id,
                quantity=quantity,
                unit_price=menu_item.price,
                position=position,
            )
        )

    order_id = await _next_order_id(db, rng or random.SystemRandom())

    order = Order(
        order_id=order_id,
        customer_id=customer.id,
        vendor_id=vendor.id,
        customer_name=customer.full_name,
        phone_number=phone_number,
        delivery_type=delivery_type,
        location=location,
        address=address,
        notes=notes,
        items=order_items,
        total_amount=total_amount,
        status=OrderStatus.PENDING.value,
    )
    order = await order_repository.insert(db, order)

    logger.info(
        f"Order {order.order_id} created: customer={customer.id} vendor={vendor.id} "
        f"items={len(order_items)} total={total_amount}"
    )
    return order


# ════════════════════════════════════════════════════════════════════
# Vendor order listings
# ════════════════════════════════════════════════════════════════════

def _coerce_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def normalize_pagination(page: Any = None, limit: Any = None) -> tuple[int, int]:
    """
    Lenient page/limit parsing: garbage falls back to defaults, never errors.

    page < 1 → 1; limit is clamped to [1, max_page_size] (so 0 → 1, 1000 → 100).
    page is capped so the row offset stays within a 64-bit INTEGER.
    """
    parsed_limit = _coerce_int(limit)
    if parsed_limit is None:
        parsed_limit = settings.default_page_size
    parsed_limit = min(max(1, parsed_limit), settings.max_page_size)

    parsed_page = _coerce_int(page)
    parsed_page = DEFAULT_PAGE if parsed_page is None else max(1, parsed_page)
    parsed_page = min(parsed_page, MAX_ROW_OFFSET // parsed_limit + 1)

    return parsed_page, parsed_limit


def _to_storage_time(value: datetime) -> datetime:
    """Aware → naive UTC. Naive values are assumed to already be UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def todays_window(now: datetime | None = None, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """
    [local midnight, local end of day] around `now`, returned as naive UTC.

    tz=None means the server's local time zone. A naive `now` is read as UTC.
    Each bound gets the UTC offset in force at that wall time, so DST
    transition days are converted correctly.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if tz is None:
        # Naive local wall times; astimezone() resolves each one's own offset
        local_now = now.astimezone().replace(tzinfo=None)
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0).astimezone()
        end = local_now.replace(hour=23, minute=59, second=59, microsecond=999999).astimezone()
    else:
        local_now = now.astimezone(tz)
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = local_now.replace(hour=23, minute=59, second=59, microsecond=999999)
    return _to_storage_time(start), _to_storage_time(end)


def build_vendor_order_filters(
    vendor_id: int,
    *,
    search: str | None = None,
    created_from: datetime | None = None,
    created_to: datetime | None = None,
) -> list:
    """Scope + soft-delete + optional date range + optional text search."""
    filters = [
        Order.vendor_id == vendor_id,
        Order.is_deleted.is_not(True),
    ]

    if created_from is not None and created_to is not None:
        filters.append(Order.created_at >= _to_storage_time(created_from))
        filters.append(Order.created_at <= _to_storage_time(created_to))

    term = (search or "").strip().lower()
    if term:
        filters.append(
            or_(
                func.lower(Order.customer_name).contains(term, autoescape=True),
                func.lower(Order.phone_number).contains(term, autoescape=True),
                func.lower(Order.order_id).contains(term, autoescape=True),
            )
        )

    return filters


async def query_vendor_orders(
    db: AsyncSession,
    *,
    vendor_id: int,
    page: Any = None,
    limit: Any = None,
    search: str | None = None,
    created_from: datetime | None = None,
    created_to: datetime | None = None,
) -> dict:
    parsed_page, parsed_limit = normalize_pagination(page, limit)
    filters = build_vendor_order_filters(
        vendor_id,
        search=search,
        created_from=created_from,
        created_to=created_to,
    )

    orders = await order_repository.find(
        db, filters, skip=(parsed_page - 1) * parsed_limit, limit=parsed_limit
    )
    total = await order_repository.count(db, filters)

    return {
        "orders": orders,
        "total": total,
        "page": parsed_page,
        "limit": parsed_limit,
        "total_pages": math.ceil(total / parsed_limit),
    }


async def find_all_vendor_orders(
    db: AsyncSession,
    *,
    vendor_id: int,
    page: Any = 1,
    limit: Any = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    search: str | None = None,
) -> dict:
    """All of a vendor's orders. The date range only applies when both bounds are given."""
    return await query_vendor_orders(
        db,
        vendor_id=vendor_id,
        page=page,
        limit=limit,
        search=search,
        created_from=start_date,
        created_to=end_date,
    )


async def get_todays_vendor_orders(
    db: AsyncSession,
    *,
    vendor_id: int,
    page: Any = 1,
    limit: Any = None,
    search: str | None = None,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> dict:
    start, end = todays_window(now, tz if tz is not None else settings.business_tz)
    return await query_vendor_orders(
        db,
        vendor_id=vendor_id,
        page=page,
        limit=limit,
        search=search,
        created_from=start,
        created_to=end,
    )
