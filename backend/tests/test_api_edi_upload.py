"""API tests for EDI uploads."""

import pytest
from httpx import AsyncClient
from sqlmodel import select

from edi_dashboard.config import settings
from edi_dashboard.db import Database
from edi_dashboard.models.activity import ActivityLog
from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.models.user import User
from tests.factories import edi_document, edi_row

UPLOAD_URL = "/api/v1/edi/upload"


def _files(content: bytes, filename: str = "orders.edidat") -> dict[str, tuple[str, bytes, str]]:
    return {"edi_file": (filename, content, "application/octet-stream")}


async def _actions(database: Database) -> list[str]:
    async with database.session() as session:
        return list((await session.execute(select(ActivityLog.action).order_by(ActivityLog.id))).scalars())


async def test_requires_login(client: AsyncClient) -> None:
    response = await client.post(UPLOAD_URL, files=_files(b"x"))

    assert response.status_code == 401


async def test_upload_and_reupload(user_client: AsyncClient, database: Database) -> None:
    content = edi_document(edi_row("ORD001"), edi_row("ORD002"), edi_row("")).encode("cp932")

    first = await user_client.post(UPLOAD_URL, files=_files(content))
    second = await user_client.post(UPLOAD_URL, files=_files(content))

    assert first.status_code == 200
    body = first.json()
    assert body["filename"] == "orders.edidat"
    assert body["encoding"] == "cp932"
    assert (body["total_rows"], body["extracted_rows"], body["skipped_rows"]) == (3, 2, 1)
    assert (body["new_records"], body["skipped_records"], body["error_records"]) == (2, 0, 0)
    assert [o["result"] for o in body["outcomes"]] == ["added", "added"]
    assert body["outcomes"][0]["order_id"]

    assert second.status_code == 200
    assert second.json()["new_records"] == 0
    assert [o["result"] for o in second.json()["outcomes"]] == ["skipped", "skipped"]
    assert second.json()["outcomes"][0]["reason"] == "already exists"

    async with database.session() as session:
        orders = (await session.execute(select(EdiOrder))).scalars().all()
    assert sorted(o.order_number for o in orders) == ["ORD001", "ORD002"]
    assert await _actions(database) == [ActivityAction.EDI_UPLOAD_SUCCESS] * 2


async def test_uploader_is_recorded(user_client: AsyncClient, database: Database, regular_user: User) -> None:
    content = edi_document(edi_row("ORD001")).encode("cp932")

    await user_client.post(UPLOAD_URL, files=_files(content))

    async with database.session() as session:
        order = (await session.execute(select(EdiOrder))).scalar_one()
    assert order.uploaded_by == regular_user.id


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("orders.csv", b"data"),
        ("orders.txt", b""),
        ("orders.txt", "注文番号\t品番\r\nA\tB\r\n".encode("cp932")),
    ],
)
async def test_rejected_uploads(user_client: AsyncClient, database: Database, filename: str, content: bytes) -> None:
    response = await user_client.post(UPLOAD_URL, files=_files(content, filename))

    assert response.status_code == 400
    assert response.json()["detail"]
    assert await _actions(database) == [ActivityAction.EDI_UPLOAD_FAILED]


async def test_missing_file(user_client: AsyncClient) -> None:
    response = await user_client.post(UPLOAD_URL, data={"other": "value"})

    assert response.status_code == 400
    assert response.json()["detail"] == "No file uploaded"


async def test_oversize_file(user_client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "edi_max_upload_bytes", 64)
    content = edi_document(edi_row("ORD001")).encode("cp932")

    response = await user_client.post(UPLOAD_URL, files=_files(content))

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


async def test_filename_containing_edi_is_accepted(user_client: AsyncClient) -> None:
    content = edi_document(edi_row("ORD001")).encode("cp932")

    response = await user_client.post(UPLOAD_URL, files=_files(content, "EDI_export.csv"))

    assert response.status_code == 200
