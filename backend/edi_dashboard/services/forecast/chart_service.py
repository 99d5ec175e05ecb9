"""Read-only aggregation behind the stacked order/forecast chart."""

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.forecast import ForecastEntry
from edi_dashboard.models.order import EdiOrder


@dataclass(frozen=True)
class OrderLoad:
    delivery_date: str
    status: EdiOrderStatus
    total_quantity: int
    order_count: int


@dataclass(frozen=True)
class ForecastLoad:
    month_date: date
    drawing_number: str
    total_quantity: int


@dataclass
class ChartData:
    orders: list[OrderLoad] = field(default_factory=list)
    forecasts: list[ForecastLoad] = field(default_factory=list)


class ChartService:
    """Builds both chart series; orders without a delivery date are left out."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_chart_data(self) -> ChartData:
        return ChartData(orders=await self.order_load(), forecasts=await self.forecast_load())

    async def order_load(self) -> list[OrderLoad]:
        statement = (
            select(
                EdiOrder.delivery_date,
                EdiOrder.status,
                func.sum(EdiOrder.order_quantity),
                func.count(EdiOrder.id),
            )
            .where(EdiOrder.delivery_date.is_not(None), EdiOrder.delivery_date != "")  # type: ignore[union-attr]
            .group_by(EdiOrder.delivery_date, EdiOrder.status)
            .order_by(EdiOrder.delivery_date, EdiOrder.status)
        )
        rows = (await self.session.execute(statement)).all()
        return [
            OrderLoad(delivery_date=d, status=EdiOrderStatus(s), total_quantity=int(qty or 0), order_count=count)
            for d, s, qty, count in rows
        ]

    async def forecast_load(self) -> list[ForecastLoad]:
        statement = (
            select(ForecastEntry.month_date, ForecastEntry.drawing_number, func.sum(ForecastEntry.quantity))
            .group_by(ForecastEntry.month_date, ForecastEntry.drawing_number)
            .order_by(ForecastEntry.month_date, ForecastEntry.drawing_number)
        )
        rows = (await self.session.execute(statement)).all()
        return [ForecastLoad(month_date=m, drawing_number=dn, total_quantity=int(qty or 0)) for m, dn, qty in rows]
