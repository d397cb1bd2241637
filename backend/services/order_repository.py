"""
Order repository — persisted store of orders.

Filters are passed as a list of SQLAlchemy clauses so the page query and the
count query are always built from the same predicate.
"""

from typing import Sequence

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Order


async def insert(db: AsyncSession, order: Order) -> Order:
    """Add a fully built order and flush it so server defaults (id, created_at) are set."""
    db.add(order)
    await db.flush()
    await db.refresh(order)
    return order


async def find(
    db: AsyncSession,
    filters: Sequence[ColumnElement[bool]],
    *,
    skip: int,
    limit: int,
) -> list[Order]:
    res = await db.execute(
        select(Order)
        .where(*filters)
        .order_by(Order.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(res.scalars().all())


async def count(db: AsyncSession, filters: Sequence[ColumnElement[bool]]) -> int:
    res = await db.execute(select(func.count(Order.id)).where(*filters))
    return res.scalar_one()


async def order_id_exists(db: AsyncSession, order_id: str) -> bool:
    res = await db.execute(select(Order.id).where(Order.order_id == order_id).limit(1))
    return res.scalar_one_or_none() is not None
