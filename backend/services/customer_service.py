"""
Customer directory — read access to customer identity.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Customer
from domain.errors import NotFoundError


async def find_by_id(db: AsyncSession, customer_id: int) -> Customer:
    """
    Resolve a customer by id.

    The id comes from a verified access token, so a miss points at a stale
    token or a deleted account rather than bad user input.
    """
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise NotFoundError("Customer", customer_id)
    return customer
