"""API schemas for forecast and chart endpoints."""

from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.forecast import ForecastEntry
from edi_dashboard.services.forecast.chart_service import ChartData
from edi_dashboard.services.forecast.forecast_service import (
    ForecastBatchResult,
    ForecastInput,
    ForecastStats,
)
from edi_dashboard.utils.datetime_utils import to_api_timezone

# =============================================================================
# Request Schemas
# =============================================================================


class ForecastItem(BaseModel):
    """One forecast cell. month_date is checked per item so bad dates skip instead of failing the batch."""

    drawing_number: str = Field(validation_alias=AliasChoices("drawing_number", "drawingNumber"))
    month_date: str | None = Field(default=None, validation_alias=AliasChoices("month_date", "monthDate"))
    quantity: int = Field(default=0, ge=0)

    @field_validator("month_date", mode="before")
    @classmethod
    def stringify_month_date(cls, value: Any) -> str | None:
        # Numbers and other scalars are kept as text and rejected later as malformed dates
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def to_input(self) -> ForecastInput:
        return ForecastInput(drawing_number=self.drawing_number, month_date=self.month_date, quantity=self.quantity)


class ForecastBatchRequest(BaseModel):
    forecasts: list[ForecastItem]


# =============================================================================
# Response Schemas
# =============================================================================


class ForecastEntryResponse(BaseModel):
    drawing_number: str
    month_date: date
    quantity: int
    updated_by: int | None
    updated_at: datetime

    @field_serializer("updated_at")
    def serialize_updated_at(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @classmethod
    def from_model(cls, entry: ForecastEntry) -> "ForecastEntryResponse":
        return cls(
            drawing_number=entry.drawing_number,
            month_date=entry.month_date,
            quantity=entry.quantity,
            updated_by=entry.updated_by,
            updated_at=entry.updated_at,
        )


class SkippedForecastResponse(BaseModel):
    drawing_number: str
    month_date: str | None
    reason: str


class ForecastBatchResponse(BaseModel):
    saved: int
    skipped: list[SkippedForecastResponse]

    @classmethod
    def from_result(cls, result: ForecastBatchResult) -> "ForecastBatchResponse":
        return cls(
            saved=result.saved,
            skipped=[
                SkippedForecastResponse(
                    drawing_number=s.entry.drawing_number,
                    month_date=s.entry.month_date,
                    reason=s.reason,
                )
                for s in result.skipped
            ],
        )


class ForecastClearResponse(BaseModel):
    removed: int
    message: str


class DeliveryDateResponse(BaseModel):
    delivery_date: str
    order_count: int


class ForecastTotalsResponse(BaseModel):
    product_count: int
    total_entries: int
    total_quantity: int
    avg_quantity: float | None


class DeliveryDateRangeResponse(BaseModel):
    unique_dates: int
    earliest_date: str | None
    latest_date: str | None
    total_orders: int


class ForecastStatsResponse(BaseModel):
    forecast: ForecastTotalsResponse
    edi: DeliveryDateRangeResponse

    @classmethod
    def from_stats(cls, stats: ForecastStats) -> "ForecastStatsResponse":
        return cls(
            forecast=ForecastTotalsResponse(
                product_count=stats.product_count,
                total_entries=stats.total_entries,
                total_quantity=stats.total_quantity,
                avg_quantity=stats.avg_quantity,
            ),
            edi=DeliveryDateRangeResponse(
                unique_dates=stats.unique_delivery_dates,
                earliest_date=stats.earliest_delivery_date,
                latest_date=stats.latest_delivery_date,
                total_orders=stats.dated_orders,
            ),
        )


class OrderLoadResponse(BaseModel):
    delivery_date: str
    status: EdiOrderStatus
    total_quantity: int
    order_count: int


class ForecastLoadResponse(BaseModel):
    month_date: date
    drawing_number: str
    total_quantity: int


class ChartDataResponse(BaseModel):
    """Order load by delivery date and status, plus forecast load by month and drawing number."""

    orders: list[OrderLoadResponse]
    forecasts: list[ForecastLoadResponse]

    @classmethod
    def from_data(cls, data: ChartData) -> "ChartDataResponse":
        return cls(
            orders=[
                OrderLoadResponse(
                    delivery_date=o.delivery_date,
                    status=o.status,
                    total_quantity=o.total_quantity,
                    order_count=o.order_count,
                )
                for o in data.orders
            ],
            forecasts=[
                ForecastLoadResponse(
                    month_date=f.month_date,
                    drawing_number=f.drawing_number,
                    total_quantity=f.total_quantity,
                )
                for f in data.forecasts
            ],
        )
