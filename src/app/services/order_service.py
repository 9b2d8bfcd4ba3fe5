"""Order service for rental order placement and queries."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.address import Address
from app.models.order import (
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusHistory,
    PaymentStatus,
)
from app.models.product import Product
from app.models.user import User
from app.schemas.order import OrderCreate, OrderItemCreate
from app.services.availability_service import AvailabilityService
from app.services.delivery_service import DeliveryService
from app.services.exceptions import (
    AddressRequiredError,
    InsufficientStockError,
    InvalidDateRangeError,
    MinimumRentalDurationError,
    OrderError,
    OrderNotFoundError,
    OrderPersistenceError,
    ProductNotFoundError,
)
from app.services.pricing import (
    ItemPrice,
    calculate_item_price,
    format_order_number,
    order_number_prefix,
    parse_order_sequence,
    rental_days,
)
from app.services.redis_service import RedisService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderItemSnapshot:
    """Product data frozen into an order line at placement time."""

    product_id: UUID
    product_name: str
    product_photo: str | None
    quantity: int
    daily_price: int
    total_price: int
    savings: int

    @classmethod
    def from_product(cls, product: Product, quantity: int, price: ItemPrice) -> "OrderItemSnapshot":
        return cls(
            product_id=product.id,
            product_name=product.name,
            product_photo=product.photos[0] if product.photos else None,
            quantity=quantity,
            daily_price=product.daily_price,
            total_price=price.total_price,
            savings=price.savings,
        )

    def to_order_item(self) -> OrderItem:
        return OrderItem(
            product_id=self.product_id,
            product_name=self.product_name,
            product_photo=self.product_photo,
            quantity=self.quantity,
            daily_price=self.daily_price,
            total_price=self.total_price,
            savings=self.savings,
        )


def merge_items(items: list[OrderItemCreate]) -> dict[UUID, int]:
    """Collapse repeated product lines into one quantity per product.

    Keeps the order in which products first appear.
    """
    merged: dict[UUID, int] = {}
    for item in items:
        merged[item.product_id] = merged.get(item.product_id, 0) + item.quantity
    return merged


class OrderService:
    """Service class for order operations."""

    def __init__(self, db: AsyncSession, redis_service: RedisService | None = None):
        self.db = db
        self.redis_service = redis_service
        self.availability = AvailabilityService(db)
        self.delivery = DeliveryService(db)

    async def create_order(
        self, user_id: UUID, order_in: OrderCreate, today: date | None = None
    ) -> Order:
        """Validate, price and persist a rental order.

        Flow:
        1. Validate the rental period and delivery address
        2. Lock requested products (SELECT FOR UPDATE, primary key order)
        3. Check stock against overlapping reservations
        4. Price each line from exact-match tiers
        5. Take the next order number for the day
        6. Insert order, items and first status history row, then commit

        All business-rule checks run before anything is written. Products
        stay locked until commit or rollback, so a concurrent order for the
        same product sees this one's items when it checks stock.

        Args:
            user_id: Owner of the order
            order_in: Validated order request
            today: Date used for the order number (defaults to today)

        Returns:
            Created order with items and delivery address loaded

        Raises:
            OrderError: Any business-rule violation
            OrderPersistenceError: Storage failure, nothing was persisted
        """
        if self.redis_service is None:
            raise RuntimeError("OrderService.create_order requires a RedisService")

        start_date = order_in.rental_start_date
        end_date = order_in.rental_end_date
        if start_date >= end_date:
            raise InvalidDateRangeError()

        days = rental_days(start_date, end_date)
        if days < 1:
            raise MinimumRentalDurationError()

        requested = merge_items(order_in.items)

        try:
            address = None
            if order_in.delivery_type == DeliveryType.DELIVERY:
                address = await self._get_owned_address(user_id, order_in.delivery_address_id)

            products = await self._lock_products(list(requested))
            if len(products) != len(requested):
                raise ProductNotFoundError()

            snapshots: list[OrderItemSnapshot] = []
            for product_id, quantity in requested.items():
                product = products[product_id]

                reserved = await self.availability.get_reserved_quantity(
                    product_id, start_date, end_date
                )
                available = product.total_stock - reserved
                if available < quantity:
                    raise InsufficientStockError(product_id, quantity, max(available, 0))

                price = calculate_item_price(
                    daily_price=product.daily_price,
                    quantity=quantity,
                    days=days,
                    pricing_tiers=product.pricing_tiers,
                    quantity_pricing=product.quantity_pricing,
                )
                snapshots.append(OrderItemSnapshot.from_product(product, quantity, price))

            subtotal = sum(s.total_price for s in snapshots)
            total_savings = sum(s.savings for s in snapshots)
            delivery_fee = await self.delivery.calculate_fee(order_in.delivery_type, address)

            order_number = await self._next_order_number(today or date.today())

            order = Order(
                order_number=order_number,
                user_id=user_id,
                status=OrderStatus.CONFIRMED.value,
                delivery_type=order_in.delivery_type.value,
                delivery_address_id=address.id if address else None,
                delivery_fee=delivery_fee,
                subtotal=subtotal,
                total_amount=subtotal + delivery_fee,
                total_savings=total_savings,
                rental_start_date=start_date,
                rental_end_date=end_date,
                payment_method=order_in.payment_method.value,
                payment_status=PaymentStatus.PENDING.value,
                notes=order_in.notes,
            )
            order.items = [s.to_order_item() for s in snapshots]
            order.status_history = [
                OrderStatusHistory(
                    status=OrderStatus.CONFIRMED.value,
                    notes="Order created",
                )
            ]

            self.db.add(order)
            await self.db.commit()

        except OrderError as e:
            await self.db.rollback()
            logger.info(f"Order rejected for user {user_id}: {e.code}")
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Failed to persist order for user {user_id}")
            raise OrderPersistenceError() from e
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Created order {order.order_number} for user {user_id}: "
            f"{len(snapshots)} items, {days} days, total {order.total_amount}"
        )
        return await self.get_order_by_id(order.id)

    async def _get_owned_address(self, user_id: UUID, address_id: UUID | None) -> Address:
        if address_id is None:
            raise AddressRequiredError()

        result = await self.db.execute(
            select(Address).where(Address.id == address_id).where(Address.user_id == user_id)
        )
        address = result.scalar_one_or_none()
        if address is None:
            raise AddressRequiredError()
        return address

    async def _lock_products(self, product_ids: list[UUID]) -> dict[UUID, Product]:
        """Load active products with their tiers under a row lock."""
        result = await self.db.execute(
            select(Product)
            .options(
                selectinload(Product.pricing_tiers),
                selectinload(Product.quantity_pricing),
            )
            .where(Product.id.in_(product_ids))
            .where(Product.is_active.is_(True))
            .order_by(Product.id)
            .with_for_update(of=Product)
            .execution_options(populate_existing=True)
        )
        return {product.id: product for product in result.scalars().all()}

    async def _next_order_number(self, day: date) -> str:
        """Next YYYYMMDD#### number for a day.

        The highest number already stored for the day raises the Redis
        counter when it is missing or behind.
        """
        prefix = order_number_prefix(day)
        # Longer numbers carry larger sequences (past 9999)
        result = await self.db.execute(
            select(Order.order_number)
            .where(Order.order_number.startswith(prefix))
            .order_by(func.length(Order.order_number).desc(), Order.order_number.desc())
            .limit(1)
        )
        floor = parse_order_sequence(result.scalar_one_or_none())

        sequence = await self.redis_service.next_order_sequence(
            prefix, floor, settings.ORDER_SEQUENCE_TTL_SECONDS
        )
        return format_order_number(day, sequence)

    async def get_order_by_id(self, order_id: UUID) -> Order | None:
        """Get order by ID with items, address and status history."""
        result = await self.db.execute(
            select(Order)
            .options(
                selectinload(Order.items),
                selectinload(Order.delivery_address),
                selectinload(Order.status_history),
            )
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_user_order(self, user_id: UUID, order_id: UUID) -> Order:
        """Get one of the user's own orders.

        Raises:
            OrderNotFoundError: No such order for this user
        """
        order = await self.get_order_by_id(order_id)
        if order is None or order.user_id != user_id:
            raise OrderNotFoundError()
        return order

    async def get_user_orders(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 20,
        status: OrderStatus | None = None,
    ) -> tuple[list[Order], int]:
        """Get orders for a specific user, newest first.

        Args:
            user_id: User UUID
            skip: Number of records to skip
            limit: Maximum number of records to return
            status: Only return orders in this status

        Returns:
            Tuple of (orders list, total count)
        """
        filters = [Order.user_id == user_id]
        if status is not None:
            filters.append(Order.status == status.value)

        count_result = await self.db.execute(select(func.count(Order.id)).where(*filters))
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.items), selectinload(Order.delivery_address))
            .where(*filters)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        orders = list(result.scalars().all())

        return orders, total

    async def list_orders(
        self,
        skip: int = 0,
        limit: int = 20,
        status: OrderStatus | None = None,
        search: str | None = None,
    ) -> tuple[list[Order], int]:
        """Get all orders for the back office, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            status: Only return orders in this status
            search: Substring of the order number, customer phone or
                customer name (name match ignores case)

        Returns:
            Tuple of (orders list, total count)
        """
        filters = []
        if status is not None:
            filters.append(Order.status == status.value)
        if search:
            filters.append(
                or_(
                    Order.order_number.contains(search, autoescape=True),
                    User.phone_number.contains(search, autoescape=True),
                    User.name.icontains(search, autoescape=True),
                )
            )

        count_result = await self.db.execute(
            select(func.count(Order.id)).join(User, User.id == Order.user_id).where(*filters)
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(Order)
            .join(User, User.id == Order.user_id)
            .options(
                selectinload(Order.items),
                selectinload(Order.delivery_address),
                selectinload(Order.user),
            )
            .where(*filters)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        orders = list(result.scalars().all())

        return orders, total

    async def update_status(
        self,
        order_id: UUID,
        status: OrderStatus,
        notes: str | None = None,
        created_by: str = "admin",
    ) -> Order:
        """Move an order to a new status and record it in the history.

        Raises:
            OrderNotFoundError: Order does not exist
        """
        order = await self.get_order_by_id(order_id)
        if order is None:
            raise OrderNotFoundError()

        order.status = status.value
        order.status_history.append(
            OrderStatusHistory(status=status.value, notes=notes, created_by=created_by)
        )

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Failed to update status of order {order_id}")
            raise OrderPersistenceError() from e

        logger.info(f"Order {order.order_number} moved to {status.value} by {created_by}")
        return await self.get_order_by_id(order_id)
