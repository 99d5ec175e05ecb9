"""API tests for order listing, status updates and deletion."""

from datetime import UTC, datetime
from typing import Any

from httpx import AsyncClient
from ulid import ULID

from edi_dashboard.db import Database
from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.order import EdiOrder
from tests.factories import add_order

EARLIER = datetime(2024, 1, 1, tzinfo=UTC)


async def _seed(database: Database, order_number: str, **kwargs: Any) -> EdiOrder:
    async with database.session() as session:
        return await add_order(session, order_number, **kwargs)


async def _load(database: Database, order_id: str) -> EdiOrder | None:
    async with database.session() as session:
        return await session.get(EdiOrder, order_id)


async def test_list_requires_login(client: AsyncClient) -> None:
    response = await client.get("/api/v1/orders")

    assert response.status_code == 401


async def test_list_orders(user_client: AsyncClient, database: Database) -> None:
    await _seed(database, "OTHER", product_code="ZZ-1", delivery_date="2025-01-01")
    await _seed(database, "PRIO", product_code="PP4166-4681P004", delivery_date="2025-06-01")

    response = await user_client.get("/api/v1/orders")

    assert response.status_code == 200
    body = response.json()
    assert [o["order_number"] for o in body["orders"]] == ["PRIO", "OTHER"]
    assert body["pagination"] == {"page": 1, "limit": 100, "total": 2, "total_pages": 1}
    assert body["orders"][0]["status"] == "default"


async def test_list_pagination_and_filters(user_client: AsyncClient, database: Database) -> None:
    for i in range(3):
        await _seed(database, f"A{i}", product_code="A", delivery_date=f"2025-01-0{i + 1}")
    await _seed(database, "B", product_code="B", status=EdiOrderStatus.HALF)

    page = await user_client.get("/api/v1/orders", params={"product_code": "A", "page": 2, "limit": 2})
    by_status = await user_client.get("/api/v1/orders", params={"status": "half"})

    assert [o["order_number"] for o in page.json()["orders"]] == ["A2"]
    assert page.json()["pagination"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
    assert [o["order_number"] for o in by_status.json()["orders"]] == ["B"]


async def test_list_rejects_bad_limit(user_client: AsyncClient) -> None:
    response = await user_client.get("/api/v1/orders", params={"limit": 1001})

    assert response.status_code == 422


async def test_stats(user_client: AsyncClient, database: Database) -> None:
    await _seed(database, "1", status=EdiOrderStatus.FINISHED)
    await _seed(database, "2")

    response = await user_client.get("/api/v1/orders/stats")

    assert response.json() == {"total_orders": 2, "recent_orders": 2, "unique_products": 1, "completed_orders": 1}


async def test_update_status(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "S1", status_updated_at=EARLIER)

    response = await user_client.post("/api/v1/orders/status", json={"order_id": order.id, "status": "half"})

    assert response.status_code == 200
    body = response.json()
    assert body["changed"] is True
    assert body["previous_status"] == "default"
    assert body["order"]["status"] == "half"
    stored = await _load(database, order.id)
    assert stored is not None and stored.status == EdiOrderStatus.HALF


async def test_update_status_same_value(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "S1", status=EdiOrderStatus.HALF, status_updated_at=EARLIER)

    response = await user_client.post("/api/v1/orders/status", json={"order_id": order.id, "status": "half"})

    assert response.status_code == 200
    assert response.json()["changed"] is False
    stored = await _load(database, order.id)
    assert stored is not None
    assert stored.status_updated_at.replace(tzinfo=UTC) == EARLIER


async def test_update_status_unknown_order(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "S1")

    response = await user_client.post("/api/v1/orders/status", json={"order_id": str(ULID()), "status": "half"})

    assert response.status_code == 404
    stored = await _load(database, order.id)
    assert stored is not None and stored.status == EdiOrderStatus.DEFAULT


async def test_update_status_invalid_value(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "S1")

    response = await user_client.post("/api/v1/orders/status", json={"order_id": order.id, "status": "done"})

    assert response.status_code == 400
    stored = await _load(database, order.id)
    assert stored is not None and stored.status == EdiOrderStatus.DEFAULT


async def test_advance_status(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "S1", status=EdiOrderStatus.THREE_QUARTER)

    response = await user_client.post(f"/api/v1/orders/{order.id}/status/advance")

    assert response.status_code == 200
    assert response.json()["order"]["status"] == "finished"


async def test_delete_requires_admin(user_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "KEEP")

    response = await user_client.delete(f"/api/v1/orders/{order.id}")

    assert response.status_code == 403
    assert await _load(database, order.id) is not None


async def test_admin_delete(admin_client: AsyncClient, database: Database) -> None:
    order = await _seed(database, "GONE")

    response = await admin_client.delete(f"/api/v1/orders/{order.id}")
    missing = await admin_client.delete(f"/api/v1/orders/{order.id}")

    assert response.status_code == 200
    assert response.json()["order_number"] == "GONE"
    assert await _load(database, order.id) is None
    assert missing.status_code == 404
