"""Production forecast database model."""

from datetime import date, datetime

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from edi_dashboard.utils.datetime_utils import utc_now

# Upsert target: one quantity per drawing number per month
FORECAST_KEY_CONSTRAINT = UniqueConstraint("drawing_number", "month_date", name="uq_forecasts_drawing_month")


class ForecastEntry(SQLModel, table=True):
    """Forecast quantity for a drawing number in a given month."""

    __tablename__ = "forecasts"
    __table_args__ = (FORECAST_KEY_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    drawing_number: str = Field(max_length=255, index=True)
    month_date: date = Field(index=True)
    quantity: int = 0
    updated_by: int | None = Field(default=None, foreign_key="users.id")
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
