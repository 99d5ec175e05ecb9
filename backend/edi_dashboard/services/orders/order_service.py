"""Order management service.

Listing, dashboard statistics and administrative deletion of EDI orders.
Orders are only ever created by the EDI ingestion pipeline.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

import structlog
from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.models.types import to_ulid
from edi_dashboard.services.orders.exceptions import OrderNotFound
from edi_dashboard.utils.datetime_utils import utc_now

logger = structlog.get_logger(__name__)

RECENT_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class OrderStats:
    """Dashboard counters."""

    total_orders: int
    recent_orders: int
    unique_products: int
    completed_orders: int


def parse_order_id(order_id: str) -> str:
    """Validate an order ID, treating malformed IDs as unknown orders."""
    try:
        return str(to_ulid(order_id))
    except ValueError:
        raise OrderNotFound() from None


class OrderService:
    """Service for order read and delete operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_orders(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        product_code: str | None = None,
        status: EdiOrderStatus | None = None,
        priority: Sequence[str] = (),
    ) -> tuple[list[EdiOrder], int]:
        """List orders with pagination and optional filters. Returns (orders, total_count).

        Ordered by the product priority list (unlisted products last), then
        delivery date ascending with missing dates last, then newest upload first.
        """
        conditions = []
        if product_code:
            conditions.append(EdiOrder.product_code == product_code)
        if status is not None:
            conditions.append(EdiOrder.status == status)

        order_by = []
        if priority:
            order_by.append(
                case(
                    {code: rank for rank, code in enumerate(priority)},
                    value=EdiOrder.product_code,
                    else_=len(priority),
                )
            )
        order_by += [
            EdiOrder.delivery_date.asc().nulls_last(),  # type: ignore[union-attr]
            EdiOrder.uploaded_at.desc(),  # type: ignore[attr-defined]
        ]

        orders_statement = select(EdiOrder).where(*conditions).order_by(*order_by).offset(skip).limit(limit)
        orders_result = await self.session.execute(orders_statement)
        orders = list(orders_result.scalars().all())

        count_statement = select(func.count()).select_from(EdiOrder).where(*conditions)
        count_result = await self.session.execute(count_statement)
        total = count_result.scalar() or 0

        return orders, total

    async def get_order(self, order_id: str) -> EdiOrder:
        """Get order by ID."""
        order = await self.session.get(EdiOrder, parse_order_id(order_id))
        if not order:
            raise OrderNotFound()
        return order

    async def get_stats(self) -> OrderStats:
        """Totals for the dashboard header."""
        recent_since = utc_now() - RECENT_WINDOW
        statement = select(
            func.count(EdiOrder.id),
            func.count(case((EdiOrder.uploaded_at > recent_since, 1))),
            func.count(func.distinct(EdiOrder.product_code)),
            func.count(case((EdiOrder.status == EdiOrderStatus.FINISHED, 1))),
        )
        row = (await self.session.execute(statement)).one()
        return OrderStats(
            total_orders=row[0] or 0,
            recent_orders=row[1] or 0,
            unique_products=row[2] or 0,
            completed_orders=row[3] or 0,
        )

    async def delete_order(self, order_id: str) -> EdiOrder:
        """Delete an order. Returns the deleted order."""
        order = await self.get_order(order_id)
        await self.session.delete(order)
        await self.session.commit()
        logger.info("Deleted order", order_id=order.id, order_number=order.order_number)
        return order
