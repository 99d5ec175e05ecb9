"""Order status endpoints."""

import structlog
from fastapi import APIRouter, HTTPException

from edi_dashboard.api.v1.dependencies import (
    ActivityContextDep,
    ActivityServiceDep,
    CurrentUserDep,
    StatusServiceDep,
)
from edi_dashboard.api.v1.orders.schemas import StatusUpdateRequest, StatusUpdateResponse
from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.services.activity.activity_service import ActivityContext, ActivityLogService
from edi_dashboard.services.orders.exceptions import InvalidOrderStatus, OrderNotFound
from edi_dashboard.services.orders.status_service import StatusChange

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["orders"])


async def _record_change(activity: ActivityLogService, context: ActivityContext, change: StatusChange) -> None:
    await activity.record(
        context,
        ActivityAction.ORDER_STATUS_UPDATE,
        f"Order {change.order.order_number}: {change.previous} -> {change.order.status}",
    )


@router.post("/orders/status", response_model=StatusUpdateResponse, operation_id="updateOrderStatus")
async def update_order_status(
    body: StatusUpdateRequest,
    service: StatusServiceDep,
    _user: CurrentUserDep,
    activity: ActivityServiceDep,
    context: ActivityContextDep,
) -> StatusUpdateResponse:
    """Assign any of the four statuses to an order."""
    try:
        change = await service.set_status(body.order_id, body.status)
    except InvalidOrderStatus as e:
        raise HTTPException(status_code=400, detail=f"Invalid status: {e.value}")
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")

    if change.changed:
        await _record_change(activity, context, change)
    return StatusUpdateResponse.from_change(change)


@router.post(
    "/orders/{order_id}/status/advance",
    response_model=StatusUpdateResponse,
    operation_id="advanceOrderStatus",
)
async def advance_order_status(
    order_id: str,
    service: StatusServiceDep,
    _user: CurrentUserDep,
    activity: ActivityServiceDep,
    context: ActivityContextDep,
) -> StatusUpdateResponse:
    """Move an order to the next status in the cycle."""
    try:
        change = await service.advance_status(order_id)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")

    await _record_change(activity, context, change)
    return StatusUpdateResponse.from_change(change)
