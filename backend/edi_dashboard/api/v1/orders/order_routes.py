"""Order listing and management endpoints."""

import math
from typing import Annotated

import structlog
from fastapi import APIRouter, HTTPException, Query

from edi_dashboard.api.v1.dependencies import (
    ActivityContextDep,
    ActivityServiceDep,
    AdminUserDep,
    CurrentUserDep,
    OrderServiceDep,
)
from edi_dashboard.api.v1.orders.schemas import (
    OrderDeleteResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    PaginationResponse,
)
from edi_dashboard.config import settings
from edi_dashboard.models.enums import ActivityAction, EdiOrderStatus
from edi_dashboard.services.orders.exceptions import OrderNotFound

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.get("/orders", response_model=OrderListResponse, operation_id="listOrders")
async def list_orders(
    service: OrderServiceDep,
    _user: CurrentUserDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    product_code: str | None = None,
    status: EdiOrderStatus | None = None,
) -> OrderListResponse:
    """List orders, priority products first, then by delivery date."""
    orders, total = await service.list_orders(
        skip=(page - 1) * limit,
        limit=limit,
        product_code=product_code,
        status=status,
        priority=settings.product_priority,
    )

    return OrderListResponse(
        orders=[OrderResponse.from_model(order) for order in orders],
        pagination=PaginationResponse(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )


@router.get("/orders/stats", response_model=OrderStatsResponse, operation_id="getOrderStats")
async def get_order_stats(service: OrderServiceDep, _user: CurrentUserDep) -> OrderStatsResponse:
    """Dashboard counters."""
    return OrderStatsResponse.from_stats(await service.get_stats())


@router.delete("/orders/{order_id}", response_model=OrderDeleteResponse, operation_id="deleteOrder")
async def delete_order(
    order_id: str,
    service: OrderServiceDep,
    _admin: AdminUserDep,
    activity: ActivityServiceDep,
    context: ActivityContextDep,
) -> OrderDeleteResponse:
    """Delete an order (admin only)."""
    try:
        order = await service.delete_order(order_id)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")

    await activity.record(context, ActivityAction.ORDER_DELETE, f"Order: {order.order_number}")
    return OrderDeleteResponse(
        id=order.id,
        order_number=order.order_number,
        message=f"Order {order.order_number} deleted",
    )
