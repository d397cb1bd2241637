"""
SQLAlchemy ORM models for the marketplace orders backend.

Tables:
    customers             — customer identity (name, contact)
    vendors               — storefronts: open flag, pack settings, profile
    vendor_working_hours  — one row per weekday per vendor
    menu_items            — priced, enable-able menu entries (read-only here)
    orders                — customer purchases from one vendor
    order_items           — ordered line items with a price snapshot
"""
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, Text, ForeignKey,
    UniqueConstraint, Index,
)
from sqlalchemy.orm import relationship

from database import Base
from domain.enums import OrderStatus, DeliveryType


def utcnow() -> datetime:
    """Naive UTC timestamp, the storage convention for every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Customer(Base):
    """Customer identity. Owned by the identity service; read-only here."""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(254), unique=True, nullable=True, index=True)
    phone_number = Column(String(32), nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Vendor(Base):
    """A storefront: open/closed state, working hours, pack settings and profile."""
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Profile
    restaurant_name = Column(String(200), nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    email = Column(String(254), unique=True, nullable=True, index=True)
    phone_number = Column(String(32), nullable=True)
    location_name = Column(String(200), nullable=True)
    address = Column(Text, nullable=True)
    display_image = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)

    # Credentials belong to the identity service; never serialized
    password_hash = Column(String(255), nullable=True)

    # Operating state
    is_store_open = Column(Boolean, nullable=False, default=False)
    pack_limit = Column(Integer, nullable=False, default=0)
    pack_price = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    working_hours = relationship(
        "VendorWorkingHour",
        back_populates="vendor",
        order_by="VendorWorkingHour.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def pack_settings(self) -> dict:
        return {"limit": self.pack_limit, "price": self.pack_price}


class VendorWorkingHour(Base):
    """Opening hours for one weekday. Exactly one row per (vendor, day)."""
    __tablename__ = "vendor_working_hours"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    day = Column(String(16), nullable=False)
    opening_time = Column(String(5), nullable=True)  # "HH:MM"
    closing_time = Column(String(5), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    position = Column(Integer, nullable=False, default=0)  # Monday=0 .. Sunday=6

    vendor = relationship("Vendor", back_populates="working_hours")

    __table_args__ = (
        UniqueConstraint("vendor_id", "day", name="uq_vendor_working_hours_day"),
    )


class MenuItem(Base):
    """Menu entry. Managed by the catalog service; this backend only reads it."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    is_enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(32), unique=True, nullable=False, index=True)  # "ST-" + 12 chars
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)

    # Snapshot of the customer at order time
    customer_name = Column(String(200), nullable=False)
    phone_number = Column(String(32), nullable=False)

    delivery_type = Column(String(20), nullable=False, default=DeliveryType.DELIVERY.value)
    location = Column(String(200), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    total_amount = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        # Vendor order listings: filter by vendor_id, order by created_at DESC
        Index("ix_orders_vendor_created", "vendor_id", "created_at"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Float, nullable=False, default=0.0)  # price at order time
    position = Column(Integer, nullable=False, default=0)  # submission order

    order = relationship("Order", back_populates="items")
