"""
Pytest configuration and shared fixtures.

Provides an in-memory SQLite session per test, an httpx client bound to the
FastAPI app with get_db overridden, and sample customers/vendors/menu items.
"""
from datetime import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings
from database import Base, get_db, register_sqlite_functions

# ── Test Configuration ───────────────────────────────────────────────
# Set test-only values for settings that would normally come from .env
if not settings.jwt_secret:
    settings.jwt_secret = "test-jwt-secret-for-pytest-only"


# ── Database Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create an in-memory SQLite database session for each test.

    Uses StaticPool to allow in-memory SQLite with async SQLAlchemy.
    """
    import db_models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_functions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx client over the ASGI app, sharing the test DB session.

    Runs on the test's own event loop, so the aiosqlite connection is reused safely.
    """
    from main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# ── Auth Helpers ─────────────────────────────────────────────────────


@pytest.fixture
def auth_headers():
    """Build an Authorization header with a valid JWT for (principal_id, role)."""
    from middleware.auth import issue_access_token

    def _headers(principal_id: int, role: str) -> dict:
        token = issue_access_token(principal_id=principal_id, role=role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ── Test Data Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture
async def customer(db_session: AsyncSession):
    from db_models import Customer

    c = Customer(full_name="Ada Obi", email="ada@example.com", phone_number="08030000001")
    db_session.add(c)
    await db_session.commit()
    await db_session.refresh(c)
    return c


@pytest_asyncio.fixture
async def open_vendor(db_session: AsyncSession):
    from services import vendor_service

    vendor = await vendor_service.create_vendor(
        db_session,
        restaurant_name="Mama Put",
        slug="mama-put",
        email="hello@mamaput.test",
        is_store_open=True,
        first_name="Ngozi",
        location_name="Yaba",
    )
    await db_session.commit()
    return vendor


@pytest_asyncio.fixture
async def closed_vendor(db_session: AsyncSession):
    from services import vendor_service

    vendor = await vendor_service.create_vendor(
        db_session,
        restaurant_name="Night Grill",
        slug="night-grill",
        email="grill@example.test",
        is_store_open=False,
    )
    await db_session.commit()
    return vendor


@pytest_asyncio.fixture
async def menu(db_session: AsyncSession, open_vendor):
    """Jollof (500), Plantain (300), and a disabled Suya (1200)."""
    from db_models import MenuItem

    items = {
        "jollof": MenuItem(vendor_id=open_vendor.id, name="Jollof Rice", price=500.0, is_enabled=True),
        "plantain": MenuItem(vendor_id=open_vendor.id, name="Fried Plantain", price=300.0, is_enabled=True),
        "suya": MenuItem(vendor_id=open_vendor.id, name="Suya", price=1200.0, is_enabled=False),
    }
    db_session.add_all(items.values())
    await db_session.commit()
    return items


@pytest.fixture
def make_order(db_session: AsyncSession, customer):
    """Insert an order row directly, with full control over created_at/is_deleted."""
    from db_models import Order

    counter = {"n": 0}

    async def _make(vendor, *, created_at: datetime, **fields) -> Order:
        counter["n"] += 1
        values = {
            "order_id": f"ST-TEST{counter['n']:08d}",
            "customer_id": customer.id,
            "vendor_id": vendor.id,
            "customer_name": customer.full_name,
            "phone_number": "08030000001",
            "delivery_type": "delivery",
            "total_amount": 1000.0,
            "status": "pending",
            "created_at": created_at,
            "items": [],
        }
        values.update(fields)
        order = Order(**values)
        db_session.add(order)
        await db_session.commit()
        return order

    return _make
