"""API tests for forecasts and chart data."""

from httpx import AsyncClient

from edi_dashboard.db import Database
from edi_dashboard.models.enums import EdiOrderStatus
from tests.factories import add_forecast, add_order

BATCH_URL = "/api/v1/forecasts/batch"


async def test_batch_save_and_list(user_client: AsyncClient) -> None:
    first = await user_client.post(
        BATCH_URL, json={"forecasts": [{"drawing_number": "X1", "month_date": "2025-01-01", "quantity": 10}]}
    )
    second = await user_client.post(
        BATCH_URL,
        json={
            "forecasts": [
                {"drawing_number": "X1", "month_date": "2025-01-01", "quantity": 20},
                {"drawing_number": "X1", "month_date": "01/02/2025", "quantity": 5},
            ]
        },
    )
    listing = await user_client.get("/api/v1/forecasts")

    assert first.json() == {"saved": 1, "skipped": []}
    assert second.status_code == 200
    assert second.json()["saved"] == 1
    assert second.json()["skipped"] == [
        {"drawing_number": "X1", "month_date": "01/02/2025", "reason": "invalid date format"}
    ]
    entries = listing.json()
    assert len(entries) == 1
    assert (entries[0]["drawing_number"], entries[0]["month_date"], entries[0]["quantity"]) == ("X1", "2025-01-01", 20)
    assert entries[0]["updated_by"] is not None


async def test_batch_rejects_malformed_body(user_client: AsyncClient) -> None:
    response = await user_client.post(BATCH_URL, json={"forecasts": "nope"})

    assert response.status_code == 422


async def test_clear_requires_admin(user_client: AsyncClient, database: Database) -> None:
    async with database.session() as session:
        await add_forecast(session, "X1", "2025-01-01", 10)

    response = await user_client.delete("/api/v1/forecasts")
    listing = await user_client.get("/api/v1/forecasts")

    assert response.status_code == 403
    assert len(listing.json()) == 1


async def test_admin_clear(admin_client: AsyncClient, database: Database) -> None:
    async with database.session() as session:
        await add_forecast(session, "X1", "2025-01-01", 10)
        await add_forecast(session, "X2", "2025-01-01", 10)

    response = await admin_client.delete("/api/v1/forecasts")

    assert response.status_code == 200
    assert response.json()["removed"] == 2
    assert (await admin_client.get("/api/v1/forecasts")).json() == []


async def test_delivery_dates_and_stats(user_client: AsyncClient, database: Database) -> None:
    async with database.session() as session:
        await add_order(session, "1", delivery_date="2025-02-01")
        await add_order(session, "2", delivery_date="2025-02-01")
        await add_order(session, "3", delivery_date="")
        await add_forecast(session, "X1", "2025-02-01", 6)

    dates = await user_client.get("/api/v1/forecasts/delivery-dates")
    stats = await user_client.get("/api/v1/forecasts/stats")

    assert dates.json() == [{"delivery_date": "2025-02-01", "order_count": 2}]
    assert stats.json()["forecast"] == {"product_count": 1, "total_entries": 1, "total_quantity": 6, "avg_quantity": 6.0}
    assert stats.json()["edi"] == {
        "unique_dates": 1,
        "earliest_date": "2025-02-01",
        "latest_date": "2025-02-01",
        "total_orders": 2,
    }


async def test_chart_data(user_client: AsyncClient, database: Database) -> None:
    async with database.session() as session:
        await add_order(session, "1", delivery_date="2025-02-01", order_quantity=3, status=EdiOrderStatus.HALF)
        await add_order(session, "2", delivery_date=None, order_quantity=9)
        await add_forecast(session, "X1", "2025-02-01", 6)

    response = await user_client.get("/api/v1/chart-data")

    assert response.status_code == 200
    assert response.json() == {
        "orders": [{"delivery_date": "2025-02-01", "status": "half", "total_quantity": 3, "order_count": 1}],
        "forecasts": [{"month_date": "2025-02-01", "drawing_number": "X1", "total_quantity": 6}],
    }


async def test_chart_data_requires_login(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/chart-data")).status_code == 401


async def test_batch_accepts_camel_case_fields(user_client: AsyncClient) -> None:
    response = await user_client.post(
        BATCH_URL, json={"forecasts": [{"drawingNumber": "X9", "monthDate": "2025-04-01", "quantity": 3}]}
    )

    assert response.json() == {"saved": 1, "skipped": []}


async def test_batch_skips_items_with_missing_or_non_text_dates(user_client: AsyncClient) -> None:
    response = await user_client.post(
        BATCH_URL,
        json={
            "forecasts": [
                {"drawing_number": "X1", "month_date": "2025-01-01", "quantity": 10},
                {"drawing_number": "X2", "month_date": None, "quantity": 5},
                {"drawing_number": "X3", "month_date": 20250101, "quantity": 5},
                {"drawing_number": "X4", "quantity": 5},
            ]
        },
    )
    listing = await user_client.get("/api/v1/forecasts")

    assert response.status_code == 200
    assert response.json() == {
        "saved": 1,
        "skipped": [
            {"drawing_number": "X2", "month_date": None, "reason": "invalid date format"},
            {"drawing_number": "X3", "month_date": "20250101", "reason": "invalid date format"},
            {"drawing_number": "X4", "month_date": None, "reason": "invalid date format"},
        ],
    }
    assert [entry["drawing_number"] for entry in listing.json()] == ["X1"]


async def test_batch_counts_repeated_key_once(user_client: AsyncClient) -> None:
    response = await user_client.post(
        BATCH_URL,
        json={
            "forecasts": [
                {"drawing_number": "X1", "month_date": "2025-01-01", "quantity": 1},
                {"drawing_number": "X1", "month_date": "2025-01-01", "quantity": 2},
            ]
        },
    )

    assert response.json() == {"saved": 1, "skipped": []}
