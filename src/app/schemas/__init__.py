"""Pydantic schemas for request/response validation."""

from app.schemas.common import ErrorResponse, Pagination, SuccessResponse
from app.schemas.order import (
    AddressResponse,
    AdminOrderListResponse,
    AdminOrderResponse,
    OrderCreate,
    OrderDetailResponse,
    OrderItemCreate,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
    OrderUserResponse,
    StatusHistoryResponse,
)
from app.schemas.product import AvailabilityResponse

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "Pagination",
    "OrderItemCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "AddressResponse",
    "StatusHistoryResponse",
    "OrderResponse",
    "OrderDetailResponse",
    "OrderStatusResponse",
    "OrderListResponse",
    "OrderUserResponse",
    "AdminOrderResponse",
    "AdminOrderListResponse",
    "AvailabilityResponse",
]
