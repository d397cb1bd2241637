"""
Domain enums shared by models, services and routes.
"""

from enum import Enum


class OrderStatus(str, Enum):
    # Orders are always created PENDING; later transitions belong to fulfillment.
    PENDING = "pending"
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DeliveryType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class Role(str, Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
