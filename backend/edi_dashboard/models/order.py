"""EDI order database model."""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from edi_dashboard.models.enums import EDI_ORDER_STATUS_ENUM, EdiOrderStatus
from edi_dashboard.models.types import ULIDType, new_ulid
from edi_dashboard.utils.datetime_utils import utc_now


class EdiOrder(SQLModel, table=True):
    """Order record ingested from a vendor EDI export."""

    __tablename__ = "edi_orders"

    # ULID stored as UUID
    id: str = Field(
        default_factory=new_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )

    # Vendor order number, the deduplication key
    order_number: str = Field(max_length=255, unique=True, index=True)

    product_code: str | None = Field(default=None, max_length=255, index=True)
    product_name: str | None = Field(default=None, max_length=255)
    product_spec: str | None = Field(default=None, max_length=255)  # 品名・規格 column as found in the file
    order_quantity: int = 1

    # Normalized to YYYY-MM-DD when recognised, otherwise the raw value from the file
    delivery_date: str | None = Field(default=None, max_length=100, index=True)

    status: EdiOrderStatus = Field(
        default=EdiOrderStatus.DEFAULT,
        sa_column=Column(EDI_ORDER_STATUS_ENUM, nullable=False, index=True),
    )
    status_updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    uploaded_by: int | None = Field(default=None, foreign_key="users.id")
    uploaded_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
