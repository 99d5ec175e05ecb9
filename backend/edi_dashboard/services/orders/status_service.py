"""Order status assignment.

Statuses form a cycle (default -> half -> three-quarter -> finished), but any
valid status may be assigned directly; only membership is checked. The
status timestamp moves only when the value actually changes.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.services.orders.exceptions import InvalidOrderStatus, OrderNotFound
from edi_dashboard.services.orders.order_service import parse_order_id
from edi_dashboard.utils.datetime_utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StatusChange:
    """Result of a status write."""

    order: EdiOrder
    previous: EdiOrderStatus

    @property
    def changed(self) -> bool:
        return self.order.status != self.previous


def parse_status(value: str | EdiOrderStatus) -> EdiOrderStatus:
    """Convert a raw status string, rejecting values outside the enum."""
    try:
        return EdiOrderStatus(value)
    except ValueError:
        raise InvalidOrderStatus(str(value)) from None


class OrderStatusService:
    """Applies status writes to orders, one transaction per write."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def set_status(self, order_id: str, status: str | EdiOrderStatus) -> StatusChange:
        """Assign a status.

        Raises:
            InvalidOrderStatus: status is not one of the four known values
            OrderNotFound: no order with this ID
        """
        new_status = parse_status(status)
        order = await self._get_for_update(order_id)
        return await self._apply(order, new_status)

    async def advance_status(self, order_id: str) -> StatusChange:
        """Move an order one step along the status cycle."""
        order = await self._get_for_update(order_id)
        return await self._apply(order, order.status.next)

    async def _get_for_update(self, order_id: str) -> EdiOrder:
        order = await self.session.get(EdiOrder, parse_order_id(order_id), with_for_update=True)
        if not order:
            await self.session.rollback()
            raise OrderNotFound()
        return order

    async def _apply(self, order: EdiOrder, new_status: EdiOrderStatus) -> StatusChange:
        previous = order.status
        if new_status != previous:
            order.status = new_status
            order.status_updated_at = utc_now()
            logger.info("Order status changed", order_id=order.id, previous=previous, status=new_status)
        else:
            logger.debug("Order status unchanged", order_id=order.id, status=new_status)
        # Ends the transaction either way (also releases the row lock)
        await self.session.commit()
        return StatusChange(order=order, previous=previous)
