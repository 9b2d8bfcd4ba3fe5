"""Pytest configuration and fixtures for testing."""

import os

# Settings are read at import time
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date, datetime, timedelta
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.core.database import Base
from app.models import (
    Address,
    DeliveryZone,
    Order,
    OrderItem,
    OrderStatus,
    PricingTier,
    Product,
    QuantityPricing,
    User,
    UserSession,
)
from app.services.delivery_service import clear_zone_cache
from app.services.redis_service import RedisService

TODAY = date(2026, 10, 19)


class FakeSequenceScript:
    """Stands in for the registered order sequence Lua script."""

    def __init__(self):
        self.counters: dict[str, int] = {}

    async def __call__(self, keys, args):
        key = keys[0]
        self.counters[key] = max(self.counters.get(key, -1), int(args[0]))
        self.counters[key] += 1
        return self.counters[key]


# Mock Redis client fixture
@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock Redis client."""
    redis = AsyncMock()

    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.register_script = MagicMock(return_value=FakeSequenceScript())

    return redis


@pytest.fixture
def redis_service(mock_redis: AsyncMock) -> RedisService:
    return RedisService(mock_redis)


@pytest.fixture(autouse=True)
def _clear_zone_cache():
    clear_zone_cache()
    yield
    clear_zone_cache()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


class Factory:
    """Inserts test rows and commits them."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def user(
        self,
        is_admin: bool = False,
        token: str | None = None,
        name: str = "Test",
        phone_number: str | None = None,
    ) -> User:
        user = User(
            phone_number=phone_number or f"+998{uuid4().int % 10**9:09d}",
            name=name,
            is_admin=is_admin,
        )
        await self._save(user)
        if token:
            await self._save(
                UserSession(
                    session_token=token,
                    user_id=user.id,
                    expires=datetime.utcnow() + timedelta(days=1),
                )
            )
        return user

    async def address(self, user: User, city: str = "Ташкент") -> Address:
        return await self._save(
            Address(user_id=user.id, full_address=f"{city}, test street 1", city=city)
        )

    async def zone(self, name: str, price: int, is_active: bool = True) -> DeliveryZone:
        return await self._save(DeliveryZone(name=name, price=price, is_active=is_active))

    async def product(
        self,
        daily_price: int = 10_000,
        total_stock: int = 10,
        day_tiers: dict[int, int] | None = None,
        quantity_tiers: dict[int, int] | None = None,
        is_active: bool = True,
        name: str = "Chiavari chair",
        photos: list[str] | None = None,
    ) -> Product:
        product = Product(
            name=name,
            daily_price=daily_price,
            total_stock=total_stock,
            is_active=is_active,
            photos=photos if photos is not None else ["https://cdn.example.com/chair.jpg"],
            pricing_tiers=[
                PricingTier(days=d, total_price=p) for d, p in (day_tiers or {}).items()
            ],
            quantity_pricing=[
                QuantityPricing(quantity=q, total_price=p)
                for q, p in (quantity_tiers or {}).items()
            ],
        )
        return await self._save(product)

    async def reservation(
        self,
        user: User,
        product_id: UUID,
        quantity: int,
        start: date,
        end: date,
        status: OrderStatus = OrderStatus.CONFIRMED,
        order_number: str | None = None,
    ) -> Order:
        """Existing order holding units of a product."""
        order = Order(
            order_number=order_number or f"X{uuid4().hex[:12]}",
            user_id=user.id,
            status=status.value,
            delivery_type="SELF_PICKUP",
            subtotal=0,
            total_amount=0,
            rental_start_date=start,
            rental_end_date=end,
            payment_method="PAYME",
            items=[
                OrderItem(
                    product_id=product_id,
                    product_name="reserved",
                    quantity=quantity,
                    daily_price=0,
                    total_price=0,
                )
            ],
        )
        return await self._save(order)


@pytest.fixture
def factory(db_session: AsyncSession) -> Factory:
    return Factory(db_session)
