"""Back-office order management endpoints."""

import math
from uuid import UUID

from fastapi import APIRouter, Query

from app.api.deps import AdminUser, OrderServiceDep, Translate
from app.core.config import settings
from app.models.order import OrderStatus
from app.schemas.common import Pagination, SuccessResponse
from app.schemas.order import (
    AdminOrderListResponse,
    AdminOrderResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
)

router = APIRouter()


@router.get("/orders", response_model=AdminOrderListResponse)
async def list_orders(
    admin_user: AdminUser,
    order_service: OrderServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    status_filter: OrderStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, min_length=1),
):
    """List all orders, newest first (admin only).

    ``search`` matches part of the order number, the customer's phone
    number or the customer's name.
    """
    limit = min(limit, settings.ADMIN_ORDERS_MAX_LIMIT)
    orders, total = await order_service.list_orders(
        skip=(page - 1) * limit,
        limit=limit,
        status=status_filter,
        search=search,
    )

    total_pages = math.ceil(total / limit)
    return AdminOrderListResponse(
        data=[AdminOrderResponse.model_validate(o) for o in orders],
        pagination=Pagination(
            current_page=page,
            limit=limit,
            total_count=total,
            total_pages=total_pages,
            has_more=page < total_pages,
        ),
    )


@router.post("/orders/{order_id}/status", response_model=SuccessResponse[OrderStatusResponse])
async def update_order_status(
    order_id: UUID,
    status_in: OrderStatusUpdate,
    admin_user: AdminUser,
    order_service: OrderServiceDep,
    t: Translate,
):
    """Change an order's status (admin only).

    Returned or cancelled orders stop holding stock for their period.
    """
    order = await order_service.update_status(
        order_id, status_in.status, notes=status_in.notes, created_by="admin"
    )
    return SuccessResponse(
        message=t("orderUpdated"),
        data=OrderStatusResponse.model_validate(order),
    )
