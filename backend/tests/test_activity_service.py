"""Tests for the activity log sink."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.models.user import User
from edi_dashboard.services.activity.activity_service import ActivityContext, ActivityLogService


async def test_record_and_list(
    activity: ActivityLogService, activity_context: ActivityContext, regular_user: User
) -> None:
    await activity.record(activity_context, ActivityAction.LOGIN_FAILED, "Failed login for ghost")
    context = ActivityContext(session_id="s2", user_id=regular_user.id, user_agent="ua", ip_address="10.0.0.1")
    assert await activity.record(context, ActivityAction.LOGIN_SUCCESS, "operator")

    entries, total = await activity.list_recent()

    assert total == 2
    newest = entries[0]
    assert newest.log.action == ActivityAction.LOGIN_SUCCESS
    assert newest.username == "operator"
    assert newest.description == "User logged in successfully"
    assert newest.log.ip_address == "10.0.0.1"
    assert entries[1].username is None


async def test_list_pagination(activity: ActivityLogService, activity_context: ActivityContext) -> None:
    for i in range(5):
        await activity.record(activity_context, ActivityAction.FORECAST_BATCH_SAVE, f"batch {i}")

    entries, total = await activity.list_recent(skip=1, limit=2)

    assert total == 5
    assert [e.log.details for e in entries] == ["batch 3", "batch 2"]


async def test_write_failure_is_swallowed(activity_context: ActivityContext) -> None:
    session = MagicMock(spec=AsyncSession)
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))
    session.__aenter__.return_value = session
    session.__aexit__.return_value = False
    session_maker = MagicMock(return_value=session)

    ok = await ActivityLogService(session_maker).record(activity_context, ActivityAction.LOGOUT)

    assert ok is False
