"""Business logic services."""

from app.services.availability_service import AvailabilityService
from app.services.delivery_service import DeliveryService
from app.services.order_service import OrderService
from app.services.redis_service import RedisService, get_redis_service
from app.services.user_service import UserService

__all__ = [
    "AvailabilityService",
    "DeliveryService",
    "OrderService",
    "RedisService",
    "UserService",
    "get_redis_service",
]
