"""
Shared FastAPI dependencies.

Routers import the DB session, the caller-identity guards and the listing
query parameters from here.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from fastapi import Query

from database import get_db  # noqa: F401  (re-exported for routers)
from middleware.auth import require_customer, require_vendor  # noqa: F401


class OrderListParams(TypedDict):
    page: Optional[str]
    limit: Optional[str]
    search: Optional[str]


def order_list_params(
    page: Optional[str] = Query(None, description="1-based page; invalid values fall back to 1"),
    limit: Optional[str] = Query(None, description="Page size, clamped to 1..100 (default 10)"),
    search: Optional[str] = Query(None, max_length=100, description="Matches customer name, phone or order id"),
) -> OrderListParams:
    """
    Listing parameters, taken as raw strings on purpose.

    Pagination is clamped by the order service instead of being rejected, so
    "?page=abc&limit=1000" is a valid request.
    """
    return {"page": page, "limit": limit, "search": search}
