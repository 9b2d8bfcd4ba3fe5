"""Order schemas for request/response validation."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from app.models.order import DeliveryType, OrderStatus, PaymentMethod
from app.schemas.common import Pagination


class OrderItemCreate(BaseModel):
    """One cart line in an order request."""

    product_id: UUID
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    """Schema for order creation request."""

    items: list[OrderItemCreate] = Field(..., min_length=1)
    delivery_type: DeliveryType
    delivery_address_id: UUID | None = None
    rental_start_date: date
    rental_end_date: date
    payment_method: PaymentMethod
    # Saved cards are not wired to a payment provider yet
    card_id: str | None = None
    notes: str | None = None


class OrderStatusUpdate(BaseModel):
    """Schema for an admin status change."""

    status: OrderStatus
    notes: str | None = None


class OrderItemResponse(BaseModel):
    id: UUID
    product_id: UUID
    product_name: str
    product_photo: str | None
    quantity: int
    daily_price: int
    total_price: int
    savings: int

    model_config = {"from_attributes": True}


class AddressResponse(BaseModel):
    id: UUID
    user_id: UUID
    title: str | None
    full_address: str
    city: str
    district: str | None
    street: str | None
    building: str | None
    apartment: str | None
    entrance: str | None
    floor: str | None
    latitude: float | None
    longitude: float | None
    is_default: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class StatusHistoryResponse(BaseModel):
    id: UUID
    status: str
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    """Schema for order response."""

    id: UUID
    order_number: str
    user_id: UUID
    status: str
    items: list[OrderItemResponse]
    delivery_type: str
    delivery_address: AddressResponse | None
    delivery_fee: int
    subtotal: int
    total_amount: int
    total_savings: int
    rental_start_date: date
    rental_end_date: date
    payment_method: str
    payment_status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderUserResponse(BaseModel):
    id: UUID
    phone_number: str
    name: str | None

    model_config = {"from_attributes": True}


class AdminOrderResponse(OrderResponse):
    """Order with its customer and line totals for the back office."""

    user: OrderUserResponse

    @computed_field
    @property
    def items_count(self) -> int:
        return len(self.items)

    @computed_field
    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


class OrderDetailResponse(OrderResponse):
    """Order with its status history, newest first."""

    status_history: list[StatusHistoryResponse]


class OrderStatusResponse(BaseModel):
    id: UUID
    order_number: str
    status: str

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    """Schema for a page of the current user's orders."""

    success: bool = True
    data: list[OrderResponse]
    pagination: Pagination


class AdminOrderListResponse(BaseModel):
    """Schema for a page of all orders."""

    success: bool = True
    data: list[AdminOrderResponse]
    pagination: Pagination
