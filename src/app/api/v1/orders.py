"""Order placement and query API endpoints."""

import math
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, OrderServiceDep, Translate
from app.core.config import settings
from app.models.order import OrderStatus
from app.schemas.common import Pagination, SuccessResponse
from app.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderListResponse,
    OrderResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=SuccessResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    order_in: OrderCreate,
    current_user: CurrentUser,
    order_service: OrderServiceDep,
    t: Translate,
):
    """Place a rental order.

    Checks stock for the rental period, prices every line from the
    product's exact-match tiers, adds the delivery fee and stores the
    order with status CONFIRMED and payment PENDING.

    Raises:
        400: Validation or business-rule failure (see ``code``)
        500: Storage failure, nothing persisted
    """
    order = await order_service.create_order(current_user.id, order_in)
    return SuccessResponse(
        message=t("orderCreated"),
        data=OrderResponse.model_validate(order),
    )


@router.get("/my-orders", response_model=OrderListResponse)
async def get_my_orders(
    current_user: CurrentUser,
    order_service: OrderServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    status_filter: OrderStatus | None = Query(None, alias="status"),
):
    """Get current user's orders, newest first."""
    limit = min(limit, settings.MY_ORDERS_MAX_LIMIT)
    orders, total = await order_service.get_user_orders(
        user_id=current_user.id,
        skip=(page - 1) * limit,
        limit=limit,
        status=status_filter,
    )

    total_pages = math.ceil(total / limit)
    return OrderListResponse(
        data=[OrderResponse.model_validate(o) for o in orders],
        pagination=Pagination(
            current_page=page,
            limit=limit,
            total_count=total,
            total_pages=total_pages,
            has_more=page < total_pages,
        ),
    )


@router.get("/{order_id}", response_model=SuccessResponse[OrderDetailResponse])
async def get_order(
    order_id: UUID,
    current_user: CurrentUser,
    order_service: OrderServiceDep,
):
    """Get one of the current user's orders with its status history."""
    order = await order_service.get_user_order(current_user.id, order_id)
    return SuccessResponse(data=OrderDetailResponse.model_validate(order))
