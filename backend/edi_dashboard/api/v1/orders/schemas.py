"""API schemas for orders endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.services.orders.order_service import OrderStats
from edi_dashboard.services.orders.status_service import StatusChange
from edi_dashboard.utils.datetime_utils import to_api_timezone

# =============================================================================
# Request Schemas
# =============================================================================


class StatusUpdateRequest(BaseModel):
    """Set an order's status. The value is checked by the service, not the schema."""

    order_id: str = Field(min_length=1)
    status: str


# =============================================================================
# Response Schemas
# =============================================================================


class OrderResponse(BaseModel):
    """Order response schema."""

    id: str
    order_number: str
    product_code: str | None
    product_name: str | None
    product_spec: str | None
    order_quantity: int
    delivery_date: str | None
    status: EdiOrderStatus
    status_updated_at: datetime
    uploaded_by: int | None
    uploaded_at: datetime

    @field_serializer("status_updated_at", "uploaded_at")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @classmethod
    def from_model(cls, order: EdiOrder) -> "OrderResponse":
        """Create response from EdiOrder model."""
        return cls(
            id=order.id,
            order_number=order.order_number,
            product_code=order.product_code,
            product_name=order.product_name,
            product_spec=order.product_spec,
            order_quantity=order.order_quantity,
            delivery_date=order.delivery_date,
            status=order.status,
            status_updated_at=order.status_updated_at,
            uploaded_by=order.uploaded_by,
            uploaded_at=order.uploaded_at,
        )


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class OrderListResponse(BaseModel):
    """Order list response schema."""

    orders: list[OrderResponse]
    pagination: PaginationResponse


class OrderStatsResponse(BaseModel):
    total_orders: int
    recent_orders: int
    unique_products: int
    completed_orders: int

    @classmethod
    def from_stats(cls, stats: OrderStats) -> "OrderStatsResponse":
        return cls(
            total_orders=stats.total_orders,
            recent_orders=stats.recent_orders,
            unique_products=stats.unique_products,
            completed_orders=stats.completed_orders,
        )


class StatusUpdateResponse(BaseModel):
    """Result of a status write."""

    order: OrderResponse
    previous_status: EdiOrderStatus
    changed: bool

    @classmethod
    def from_change(cls, change: StatusChange) -> "StatusUpdateResponse":
        return cls(
            order=OrderResponse.from_model(change.order),
            previous_status=change.previous,
            changed=change.changed,
        )


class OrderDeleteResponse(BaseModel):
    id: str
    order_number: str
    message: str
