"""
Order endpoints — customer checkout + vendor order dashboards.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from deps import OrderListParams, get_db, order_list_params, require_customer, require_vendor
from domain.responses import paginated_response, success_response
from models import CreateOrderRequest, OrderOut, dump
from services import order_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


def _listing_response(result: dict) -> dict:
    return paginated_response(
        items=[dump(OrderOut, o) for o in result["orders"]],
        page=result["page"],
        limit=result["limit"],
        total=result["total"],
        total_pages=result["total_pages"],
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CreateOrderRequest,
    customer_id: int = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    order = await order_service.create_order(
        db,
        customer_id=customer_id,
        vendor_id=request.vendor_id,
        delivery_type=request.delivery_type.value,
        phone_number=request.phone_number,
        items=[{"menu_item_id": i.menu_item_id, "quantity": i.quantity} for i in request.items],
        location=request.location,
        address=request.address,
        notes=request.notes,
    )
    await db.commit()
    return success_response(data=dump(OrderOut, order))


@router.get("/vendor")
async def list_vendor_orders(
    params: OrderListParams = Depends(order_list_params),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    """All orders for the calling vendor. startDate/endDate only filter when both are sent."""
    result = await order_service.find_all_vendor_orders(
        db,
        vendor_id=vendor_id,
        page=params["page"],
        limit=params["limit"],
        start_date=start_date,
        end_date=end_date,
        search=params["search"],
    )
    return _listing_response(result)


@router.get("/vendor/today")
async def list_todays_vendor_orders(
    params: OrderListParams = Depends(order_list_params),
    vendor_id: int = Depends(require_vendor),
    db: AsyncSession = Depends(get_db),
):
    result = await order_service.get_todays_vendor_orders(
        db,
        vendor_id=vendor_id,
        page=params["page"],
        limit=params["limit"],
        search=params["search"],
    )
    return _listing_response(result)
