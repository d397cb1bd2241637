"""
Pydantic models for request/response validation.

Requests accept camelCase (the storefront and dashboard clients) or
snake_case; responses are always emitted in camelCase via by_alias.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.enums import DeliveryType

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ApiModel(BaseModel):
    """Shared base — allows construction by Python name or alias, and from ORM rows."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ── Order Requests ──────────────────────────────────────────────────

class OrderItemRequest(ApiModel):
    menu_item_id: int = Field(..., gt=0, alias="menuItemId")
    quantity: int = Field(..., ge=1, le=100)


class CreateOrderRequest(ApiModel):
    """Place an order. The customer comes from the access token, not the body."""
    vendor_id: int = Field(..., gt=0, alias="vendorId")
    delivery_type: DeliveryType = Field(..., alias="deliveryType")
    phone_number: str = Field(..., min_length=5, max_length=32, alias="phoneNumber")
    items: List[OrderItemRequest] = Field(..., min_length=1)
    location: Optional[str] = Field(default=None, max_length=200)
    address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)


# ── Vendor Requests ─────────────────────────────────────────────────

class UpdatePackSettingsRequest(ApiModel):
    limit: int = Field(..., ge=0)
    price: float = Field(..., ge=0)


class UpdateWorkingHoursRequest(ApiModel):
    day: str = Field(..., min_length=1, max_length=16)
    opening_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN, alias="openingTime")
    closing_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN, alias="closingTime")
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class VendorProfileUpdate(ApiModel):
    """
    Every field a vendor may change about their own profile.

    Anything not listed here (open flag, pack settings, credentials, ids) is
    rejected rather than silently written. Required columns take a default
    of None only so they can be omitted; an explicit null fails validation.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    restaurant_name: str = Field(default=None, min_length=1, max_length=200, alias="restaurantName")
    slug: str = Field(default=None, min_length=2, max_length=120, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    first_name: Optional[str] = Field(default=None, max_length=100, alias="firstName")
    last_name: Optional[str] = Field(default=None, max_length=100, alias="lastName")
    description: Optional[str] = Field(default=None, max_length=2000)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=32, alias="phoneNumber")
    location_name: Optional[str] = Field(default=None, max_length=200, alias="locationName")
    address: Optional[str] = Field(default=None, max_length=500)
    display_image: Optional[str] = Field(default=None, max_length=2000, alias="displayImage")
    category: Optional[str] = Field(default=None, max_length=100)


# ── Responses ───────────────────────────────────────────────────────

class OrderItemOut(ApiModel):
    menu_item_id: int = Field(..., alias="menuItemId")
    quantity: int
    unit_price: float = Field(..., alias="unitPrice")


class OrderOut(ApiModel):
    id: int
    order_id: str = Field(..., alias="orderId")
    customer_id: int = Field(..., alias="customerId")
    vendor_id: int = Field(..., alias="vendorId")
    customer_name: str = Field(..., alias="customerName")
    phone_number: str = Field(..., alias="phoneNumber")
    delivery_type: str = Field(..., alias="deliveryType")
    location: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    items: List[OrderItemOut]
    total_amount: float = Field(..., alias="totalAmount")
    status: str
    created_at: datetime = Field(..., alias="createdAt")


class WorkingHourOut(ApiModel):
    day: str
    opening_time: Optional[str] = Field(default=None, alias="openingTime")
    closing_time: Optional[str] = Field(default=None, alias="closingTime")
    is_active: bool = Field(..., alias="isActive")


class PackSettingsOut(ApiModel):
    limit: int
    price: float


class VendorPublicOut(ApiModel):
    """Storefront projection (vendor-by-slug page)."""
    id: int
    restaurant_name: str = Field(..., alias="restaurantName")
    slug: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    description: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    location_name: Optional[str] = Field(default=None, alias="locationName")
    address: Optional[str] = None
    display_image: Optional[str] = Field(default=None, alias="displayImage")
    category: Optional[str] = None
    is_store_open: bool = Field(..., alias="isStoreOpen")


class VendorOut(VendorPublicOut):
    """Full vendor record minus credentials."""
    working_hours: List[WorkingHourOut] = Field(default_factory=list, alias="workingHours")
    pack_settings: PackSettingsOut = Field(..., alias="packSettings")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


def dump(model_cls: type[ApiModel], obj) -> dict:
    """ORM row → JSON-ready camelCase dict."""
    return model_cls.model_validate(obj).model_dump(mode="json", by_alias=True)
