"""Seed data script for development and testing.

Creates:
- all tables (if missing)
- 1 admin + 1 customer with 30-day session tokens
- a Tashkent and a Samarkand address for the customer
- paid delivery zones for regional cities
- demo rental products with day and quantity price tiers

Environment Variables:
    RESET_DATA: Set to "true" to clear orders before seeding (default: false)

Usage:
    python -m scripts.seed_data
"""

import asyncio
import os
from datetime import datetime, timedelta

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import Base, async_session_maker, engine
from app.models import (
    Address,
    DeliveryZone,
    PricingTier,
    Product,
    QuantityPricing,
    User,
    UserSession,
)

RESET_DATA = os.getenv("RESET_DATA", "false").lower() == "true"

ADMIN_TOKEN = "dev-admin-token"
CUSTOMER_TOKEN = "dev-customer-token"

DELIVERY_ZONES = [
    ("Самарканд", 150_000),
    ("Бухара", 200_000),
    ("Андижан", 180_000),
    ("Наманган", 170_000),
]

# name, daily price, stock, {days: per-unit total}, {quantity: one-day total}
PRODUCTS = [
    ("Стул Кьявари", 15_000, 300, {2: 25_000, 3: 35_000, 7: 70_000}, {50: 600_000, 100: 1_100_000}),
    ("Стол банкетный", 60_000, 40, {2: 100_000, 3: 150_000}, {10: 500_000}),
    ("Шатёр 10x20", 1_200_000, 3, {2: 2_000_000, 3: 2_800_000}, {}),
    ("Проектор", 250_000, 5, {2: 450_000, 7: 1_200_000}, {}),
]


async def reset_orders(session: AsyncSession) -> None:
    print("Resetting orders...")
    for table in ("order_status_history", "order_items", "orders"):
        await session.execute(text(f"DELETE FROM {table}"))
    await session.commit()


async def seed_users(session: AsyncSession) -> User:
    """Create an admin and a customer, returning the customer."""
    print("Seeding users...")

    result = await session.execute(select(User).where(User.phone_number == "+998900000001"))
    customer = result.scalar_one_or_none()
    if customer:
        print("  Users already exist, skipping...")
        return customer

    admin = User(phone_number="+998900000000", name="Admin", is_admin=True)
    customer = User(phone_number="+998900000001", name="Demo Customer")
    session.add_all([admin, customer])
    await session.flush()

    expires = datetime.utcnow() + timedelta(days=30)
    session.add_all([
        UserSession(session_token=ADMIN_TOKEN, user_id=admin.id, expires=expires),
        UserSession(session_token=CUSTOMER_TOKEN, user_id=customer.id, expires=expires),
        Address(
            user_id=customer.id,
            title="Дом",
            full_address="Ташкент, ул. Амира Темура, 1",
            city="Ташкент",
            is_default=True,
        ),
        Address(
            user_id=customer.id,
            title="Дача",
            full_address="Самарканд, ул. Регистан, 5",
            city="Самарканд",
        ),
    ])
    await session.commit()

    print(f"  Admin token:    {ADMIN_TOKEN}")
    print(f"  Customer token: {CUSTOMER_TOKEN}")
    return customer


async def seed_delivery_zones(session: AsyncSession) -> None:
    print("Seeding delivery zones...")
    result = await session.execute(select(DeliveryZone.name))
    existing = set(result.scalars().all())

    for name, price in DELIVERY_ZONES:
        if name not in existing:
            session.add(DeliveryZone(name=name, price=price))
            print(f"  {name}: {price}")
    await session.commit()


async def seed_products(session: AsyncSession) -> None:
    print("Seeding products...")
    result = await session.execute(select(Product.name))
    existing = set(result.scalars().all())

    for name, daily_price, stock, day_tiers, quantity_tiers in PRODUCTS:
        if name in existing:
            continue
        product = Product(
            name=name,
            daily_price=daily_price,
            total_stock=stock,
            photos=[],
            pricing_tiers=[PricingTier(days=d, total_price=p) for d, p in day_tiers.items()],
            quantity_pricing=[
                QuantityPricing(quantity=q, total_price=p) for q, p in quantity_tiers.items()
            ],
        )
        session.add(product)
        print(f"  {name}: {daily_price}/day, stock {stock}")
    await session.commit()


async def main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        if RESET_DATA:
            await reset_orders(session)
        await seed_users(session)
        await seed_delivery_zones(session)
        await seed_products(session)

    print("\nSeed complete!")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
