"""Stock availability over rental periods."""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order import RESERVING_STATUSES, Order, OrderItem
from app.models.product import Product
from app.services.exceptions import InvalidDateRangeError, ProductLookupError


class AvailabilityService:
    """Service class for reservation queries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_reserved_quantity(
        self, product_id: UUID, start_date: date, end_date: date
    ) -> int:
        """Sum of units of a product held by orders overlapping a period.

        Only orders that still hold stock (confirmed, preparing, delivered)
        count. Bounds are inclusive: an order ending on ``start_date``
        overlaps.

        Args:
            product_id: Product UUID
            start_date: First day of the requested period
            end_date: Last day of the requested period

        Returns:
            Reserved unit count
        """
        result = await self.db.execute(
            select(func.coalesce(func.sum(OrderItem.quantity), 0))
            .join(Order, Order.id == OrderItem.order_id)
            .where(OrderItem.product_id == product_id)
            .where(Order.status.in_(RESERVING_STATUSES))
            .where(Order.rental_start_date <= end_date)
            .where(Order.rental_end_date >= start_date)
        )
        return int(result.scalar_one())

    async def get_available_quantity(
        self, product_id: UUID, start_date: date, end_date: date
    ) -> int:
        """Units of an active product still free over a period.

        Raises:
            InvalidDateRangeError: start_date is after end_date
            ProductLookupError: Product missing or inactive
        """
        if start_date > end_date:
            raise InvalidDateRangeError()

        result = await self.db.execute(
            select(Product.total_stock)
            .where(Product.id == product_id)
            .where(Product.is_active.is_(True))
        )
        total_stock = result.scalar_one_or_none()
        if total_stock is None:
            raise ProductLookupError()

        reserved = await self.get_reserved_quantity(product_id, start_date, end_date)
        return max(0, total_stock - reserved)
