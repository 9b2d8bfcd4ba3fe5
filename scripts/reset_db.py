"""Reset database to empty state.

Clears all data from:
- order_status_history, order_items, orders
- pricing tiers, products, delivery zones
- addresses, sessions, users

Also clears Redis order sequences and cached sessions.

Usage:
    python -m scripts.reset_db
"""

import asyncio

from sqlalchemy import text

from app.core.database import async_session_maker, engine
from app.core.redis import close_redis, get_redis

TABLES = [
    "order_status_history",
    "order_items",
    "orders",
    "pricing_tiers",
    "quantity_pricing",
    "products",
    "delivery_zones",
    "addresses",
    "sessions",
    "users",
]


async def reset_database():
    """Clear all data from the database."""
    print("=" * 60)
    print("Resetting database to empty state...")
    print("=" * 60)

    async with async_session_maker() as session:
        # Children first, foreign keys
        for table in TABLES:
            result = await session.execute(text(f"DELETE FROM {table}"))
            print(f"  Deleted {result.rowcount} rows from {table}")

        await session.commit()
        print("\nDatabase cleared successfully!")


async def reset_redis():
    """Delete order sequence counters and cached sessions."""
    print("\nResetting Redis...")

    try:
        redis = await get_redis()
        deleted = 0
        for pattern in ("order_seq:*", "session:*"):
            async for key in redis.scan_iter(match=pattern):
                deleted += await redis.delete(key)
        print(f"  Deleted {deleted} keys")
    except Exception as e:
        print(f"  Warning: Could not clear Redis: {e}")
    finally:
        await close_redis()


async def main():
    await reset_database()
    await reset_redis()

    print("\n" + "=" * 60)
    print("Reset complete!")
    print("=" * 60)
    print("\nTo re-seed the database, run:")
    print("  python -m scripts.seed_data")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
