"""Forecast entry endpoints."""

import structlog
from fastapi import APIRouter

from edi_dashboard.api.v1.dependencies import (
    ActivityContextDep,
    ActivityServiceDep,
    AdminUserDep,
    CurrentUserDep,
    ForecastServiceDep,
)
from edi_dashboard.api.v1.forecast.schemas import (
    DeliveryDateResponse,
    ForecastBatchRequest,
    ForecastBatchResponse,
    ForecastClearResponse,
    ForecastEntryResponse,
    ForecastStatsResponse,
)
from edi_dashboard.models.enums import ActivityAction

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["forecasts"])


@router.get("/forecasts", response_model=list[ForecastEntryResponse], operation_id="listForecasts")
async def list_forecasts(service: ForecastServiceDep, _user: CurrentUserDep) -> list[ForecastEntryResponse]:
    """All forecast entries ordered by drawing number and month."""
    return [ForecastEntryResponse.from_model(entry) for entry in await service.list_forecasts()]


@router.post("/forecasts/batch", response_model=ForecastBatchResponse, operation_id="saveForecastBatch")
async def save_forecast_batch(
    body: ForecastBatchRequest,
    service: ForecastServiceDep,
    user: CurrentUserDep,
    activity: ActivityServiceDep,
    context: ActivityContextDep,
) -> ForecastBatchResponse:
    """Upsert forecast entries; entries with an invalid month date are skipped."""
    result = await service.save_batch([item.to_input() for item in body.forecasts], updated_by=user.user_id)
    await activity.record(
        context,
        ActivityAction.FORECAST_BATCH_SAVE,
        f"Saved {result.saved} forecast entries, skipped {len(result.skipped)}",
    )
    return ForecastBatchResponse.from_result(result)


@router.delete("/forecasts", response_model=ForecastClearResponse, operation_id="clearForecasts")
async def clear_forecasts(
    service: ForecastServiceDep,
    _admin: AdminUserDep,
    activity: ActivityServiceDep,
    context: ActivityContextDep,
) -> ForecastClearResponse:
    """Delete every forecast entry (admin only)."""
    removed = await service.clear_all()
    await activity.record(context, ActivityAction.FORECAST_CLEAR_ALL, f"Cleared {removed} forecast records")
    return ForecastClearResponse(removed=removed, message=f"Cleared {removed} forecast records")


@router.get(
    "/forecasts/delivery-dates",
    response_model=list[DeliveryDateResponse],
    operation_id="listDeliveryDates",
)
async def list_delivery_dates(service: ForecastServiceDep, _user: CurrentUserDep) -> list[DeliveryDateResponse]:
    """Distinct order delivery dates with order counts, for forecast planning."""
    return [
        DeliveryDateResponse(delivery_date=d.delivery_date, order_count=d.order_count)
        for d in await service.delivery_dates()
    ]


@router.get("/forecasts/stats", response_model=ForecastStatsResponse, operation_id="getForecastStats")
async def get_forecast_stats(service: ForecastServiceDep, _user: CurrentUserDep) -> ForecastStatsResponse:
    """Forecast totals and the order delivery date range."""
    return ForecastStatsResponse.from_stats(await service.get_stats())
