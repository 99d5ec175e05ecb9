"""Tests for order status assignment."""

from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.services.orders.exceptions import InvalidOrderStatus, OrderNotFound
from edi_dashboard.services.orders.status_service import OrderStatusService
from tests.factories import add_order

EARLIER = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def _as_utc(dt: datetime) -> datetime:
    # SQLite returns naive datetimes
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (EdiOrderStatus.DEFAULT, EdiOrderStatus.HALF),
        (EdiOrderStatus.HALF, EdiOrderStatus.THREE_QUARTER),
        (EdiOrderStatus.THREE_QUARTER, EdiOrderStatus.FINISHED),
        (EdiOrderStatus.FINISHED, EdiOrderStatus.DEFAULT),
    ],
)
def test_status_cycle(status: EdiOrderStatus, expected: EdiOrderStatus) -> None:
    assert status.next == expected


async def test_set_different_status_updates_timestamp(session: AsyncSession) -> None:
    order = await add_order(session, "S1", status_updated_at=EARLIER)

    change = await OrderStatusService(session).set_status(order.id, "three-quarter")

    assert change.changed
    assert change.previous == EdiOrderStatus.DEFAULT
    assert change.order.status == EdiOrderStatus.THREE_QUARTER
    assert _as_utc(change.order.status_updated_at) > EARLIER


@pytest.mark.parametrize("status", list(EdiOrderStatus))
async def test_set_same_status_keeps_timestamp(session: AsyncSession, status: EdiOrderStatus) -> None:
    order = await add_order(session, "S1", status=status, status_updated_at=EARLIER)

    change = await OrderStatusService(session).set_status(order.id, status.value)

    assert not change.changed
    assert change.order.status == status
    assert _as_utc(change.order.status_updated_at) == EARLIER


async def test_any_status_can_be_assigned_directly(session: AsyncSession) -> None:
    order = await add_order(session, "S1")
    service = OrderStatusService(session)

    change = await service.set_status(order.id, "finished")
    assert change.order.status == EdiOrderStatus.FINISHED

    change = await service.set_status(order.id, "half")
    assert change.order.status == EdiOrderStatus.HALF


async def test_unknown_order(session: AsyncSession) -> None:
    with pytest.raises(OrderNotFound):
        await OrderStatusService(session).set_status(str(ULID()), "half")


async def test_malformed_order_id_is_not_found(session: AsyncSession) -> None:
    with pytest.raises(OrderNotFound):
        await OrderStatusService(session).set_status("not-an-id", "half")


async def test_invalid_status_leaves_order_untouched(session: AsyncSession) -> None:
    order = await add_order(session, "S1", status_updated_at=EARLIER)

    with pytest.raises(InvalidOrderStatus) as exc_info:
        await OrderStatusService(session).set_status(order.id, "done")

    assert exc_info.value.value == "done"
    await session.refresh(order)
    assert order.status == EdiOrderStatus.DEFAULT
    assert _as_utc(order.status_updated_at) == EARLIER


async def test_advance_status(session: AsyncSession) -> None:
    order = await add_order(session, "S1", status=EdiOrderStatus.FINISHED)
    service = OrderStatusService(session)

    change = await service.advance_status(order.id)
    assert (change.previous, change.order.status) == (EdiOrderStatus.FINISHED, EdiOrderStatus.DEFAULT)

    change = await service.advance_status(order.id)
    assert change.order.status == EdiOrderStatus.HALF
    assert change.changed
