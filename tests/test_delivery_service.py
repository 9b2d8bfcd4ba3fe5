"""
Tests for delivery fee calculation.
"""

import pytest

from app.models import DeliveryType
from app.services.delivery_service import DeliveryService, is_base_city


class TestIsBaseCity:
    @pytest.mark.parametrize("city", ["Ташкент", "ТАШКЕНТ", " Tashkent ", "tashkent"])
    def test_base_city(self, city):
        assert is_base_city(city)

    def test_other_city(self):
        assert not is_base_city("Samarkand")

    def test_custom_names(self):
        assert is_base_city("Bukhara", base_city_names=["Bukhara"])
        assert not is_base_city("Tashkent", base_city_names=["Bukhara"])


class TestDeliveryService:
    """Tests for DeliveryService.calculate_fee."""

    @pytest.mark.asyncio
    async def test_self_pickup_is_free(self, db_session, factory):
        user = await factory.user()
        address = await factory.address(user, city="Samarkand")
        await factory.zone("Samarkand", 150_000)

        fee = await DeliveryService(db_session).calculate_fee(DeliveryType.SELF_PICKUP, address)

        assert fee == 0

    @pytest.mark.asyncio
    async def test_zone_price(self, db_session, factory):
        user = await factory.user()
        address = await factory.address(user, city="Samarkand")
        await factory.zone("Samarkand", 150_000)

        fee = await DeliveryService(db_session).calculate_fee("DELIVERY", address)

        assert fee == 150_000

    @pytest.mark.asyncio
    async def test_zone_price_cached(self, db_session, factory):
        """Zone prices are served from the in-process cache until it expires."""
        zone = await factory.zone("Fergana", 120_000)
        service = DeliveryService(db_session)

        assert await service.get_zone_price("Fergana") == 120_000

        zone.price = 200_000
        await db_session.commit()

        assert await service.get_zone_price("Fergana") == 120_000

    @pytest.mark.asyncio
    async def test_no_address(self, db_session):
        fee = await DeliveryService(db_session).calculate_fee(DeliveryType.DELIVERY, None)

        assert fee == 0
