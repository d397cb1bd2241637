"""
Menu catalog — read-only access to menu items (price, availability).
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import MenuItem


async def find_one(db: AsyncSession, menu_item_id: int) -> MenuItem | None:
    return await db.get(MenuItem, menu_item_id)


async def find_many(db: AsyncSession, menu_item_ids: list[int]) -> dict[int, MenuItem]:
    """Fetch several items in one round trip, keyed by id. Missing ids are simply absent."""
    if not menu_item_ids:
        return {}
    res = await db.execute(select(MenuItem).where(MenuItem.id.in_(sorted(set(menu_item_ids)))))
    return {m.id: m for m in res.scalars().all()}
