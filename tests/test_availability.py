"""
Tests for AvailabilityService reservation queries.
"""

from datetime import date
from uuid import uuid4

import pytest

from app.models import OrderStatus
from app.services.availability_service import AvailabilityService
from app.services.exceptions import InvalidDateRangeError, ProductLookupError

START = date(2026, 11, 10)
END = date(2026, 11, 15)


class TestReservedQuantity:
    """Tests for units held over a period."""

    @pytest.mark.asyncio
    async def test_no_orders(self, db_session, factory):
        product = await factory.product()

        reserved = await AvailabilityService(db_session).get_reserved_quantity(
            product.id, START, END
        )

        assert reserved == 0

    @pytest.mark.asyncio
    async def test_sums_overlapping_orders(self, db_session, factory):
        user = await factory.user()
        product = await factory.product()
        await factory.reservation(user, product.id, 2, date(2026, 11, 5), START)
        await factory.reservation(user, product.id, 3, date(2026, 11, 12), date(2026, 11, 20))
        await factory.reservation(user, product.id, 4, END, date(2026, 11, 16))

        reserved = await AvailabilityService(db_session).get_reserved_quantity(
            product.id, START, END
        )

        assert reserved == 9

    @pytest.mark.asyncio
    async def test_ignores_disjoint_orders(self, db_session, factory):
        user = await factory.user()
        product = await factory.product()
        await factory.reservation(user, product.id, 2, date(2026, 11, 1), date(2026, 11, 9))
        await factory.reservation(user, product.id, 2, date(2026, 11, 16), date(2026, 11, 20))

        reserved = await AvailabilityService(db_session).get_reserved_quantity(
            product.id, START, END
        )

        assert reserved == 0

    @pytest.mark.asyncio
    async def test_counts_only_reserving_statuses(self, db_session, factory):
        user = await factory.user()
        product = await factory.product()
        for status in OrderStatus:
            await factory.reservation(user, product.id, 1, START, END, status=status)

        reserved = await AvailabilityService(db_session).get_reserved_quantity(
            product.id, START, END
        )

        # CONFIRMED, PREPARING and DELIVERED
        assert reserved == 3

    @pytest.mark.asyncio
    async def test_ignores_other_products(self, db_session, factory):
        user = await factory.user()
        product = await factory.product()
        other = await factory.product()
        await factory.reservation(user, other.id, 5, START, END)

        reserved = await AvailabilityService(db_session).get_reserved_quantity(
            product.id, START, END
        )

        assert reserved == 0


class TestAvailableQuantity:
    """Tests for free units over a period."""

    @pytest.mark.asyncio
    async def test_stock_minus_reserved(self, db_session, factory):
        user = await factory.user()
        product = await factory.product(total_stock=10)
        await factory.reservation(user, product.id, 4, START, END)

        available = await AvailabilityService(db_session).get_available_quantity(
            product.id, START, END
        )

        assert available == 6

    @pytest.mark.asyncio
    async def test_never_negative(self, db_session, factory):
        """Stock lowered below existing reservations reports zero."""
        user = await factory.user()
        product = await factory.product(total_stock=10)
        await factory.reservation(user, product.id, 8, START, END)
        product.total_stock = 5
        await db_session.commit()

        available = await AvailabilityService(db_session).get_available_quantity(
            product.id, START, END
        )

        assert available == 0

    @pytest.mark.asyncio
    async def test_single_day_period(self, db_session, factory):
        product = await factory.product(total_stock=3)

        available = await AvailabilityService(db_session).get_available_quantity(
            product.id, START, START
        )

        assert available == 3

    @pytest.mark.asyncio
    async def test_start_after_end(self, db_session, factory):
        product = await factory.product()

        with pytest.raises(InvalidDateRangeError):
            await AvailabilityService(db_session).get_available_quantity(product.id, END, START)

    @pytest.mark.asyncio
    async def test_unknown_product(self, db_session):
        with pytest.raises(ProductLookupError):
            await AvailabilityService(db_session).get_available_quantity(uuid4(), START, END)

    @pytest.mark.asyncio
    async def test_inactive_product(self, db_session, factory):
        product = await factory.product(is_active=False)

        with pytest.raises(ProductLookupError):
            await AvailabilityService(db_session).get_available_quantity(product.id, START, END)
