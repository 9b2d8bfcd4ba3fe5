"""SQLAlchemy ORM models."""

from app.models.address import Address, DeliveryZone
from app.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from app.models.order import (
    RESERVING_STATUSES,
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusHistory,
    PaymentMethod,
    PaymentStatus,
)
from app.models.product import PricingTier, Product, QuantityPricing
from app.models.user import User, UserSession

__all__ = [
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "UserSession",
    "Address",
    "DeliveryZone",
    "Product",
    "PricingTier",
    "QuantityPricing",
    "Order",
    "OrderItem",
    "OrderStatusHistory",
    "OrderStatus",
    "DeliveryType",
    "PaymentMethod",
    "PaymentStatus",
    "RESERVING_STATUSES",
]
