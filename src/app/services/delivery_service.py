"""Delivery fee calculation."""

import logging

from cachetools import TTLCache
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.address import Address, DeliveryZone
from app.models.order import DeliveryType

logger = logging.getLogger(__name__)

# Zone prices change rarely; keep them in process for a short while
_zone_price_cache: TTLCache = TTLCache(
    maxsize=256, ttl=settings.DELIVERY_ZONE_CACHE_TTL_SECONDS
)


def clear_zone_cache() -> None:
    _zone_price_cache.clear()


def is_base_city(city: str, base_city_names: list[str] | None = None) -> bool:
    """Whether a city is the platform's home city, where delivery is free."""
    names = base_city_names if base_city_names is not None else settings.BASE_CITY_NAMES
    return city.strip().lower() in {name.lower() for name in names}


class DeliveryService:
    """Service class for delivery pricing."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_zone_price(self, city: str) -> int:
        """Price of the active delivery zone named after a city, 0 if none."""
        cached = _zone_price_cache.get(city)
        if cached is not None:
            return cached

        result = await self.db.execute(
            select(DeliveryZone.price)
            .where(DeliveryZone.name == city)
            .where(DeliveryZone.is_active.is_(True))
            .limit(1)
        )
        price = result.scalar_one_or_none() or 0
        _zone_price_cache[city] = price
        return price

    async def calculate_fee(
        self, delivery_type: DeliveryType | str, address: Address | None
    ) -> int:
        """Delivery fee for an order.

        Self pickup and deliveries inside the base city are free; other
        cities pay their zone price, or nothing when no zone is configured.
        """
        if DeliveryType(delivery_type) is DeliveryType.SELF_PICKUP or address is None:
            return 0

        if is_base_city(address.city):
            return 0

        fee = await self.get_zone_price(address.city)
        if fee == 0:
            logger.info(f"No delivery zone configured for city {address.city!r}")
        return fee
