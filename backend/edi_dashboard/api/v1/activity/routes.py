"""Activity log feed."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, field_serializer

from edi_dashboard.api.v1.dependencies import ActivityServiceDep, CurrentUserDep
from edi_dashboard.services.activity.activity_service import ActivityEntry
from edi_dashboard.utils.datetime_utils import to_api_timezone

router = APIRouter(tags=["activity"])


class ActivityResponse(BaseModel):
    """Activity log entry."""

    id: int
    action: str
    description: str
    details: str | None
    username: str | None
    ip_address: str | None
    timestamp: datetime

    @field_serializer("timestamp")
    def serialize_timestamp(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @classmethod
    def from_entry(cls, entry: ActivityEntry) -> "ActivityResponse":
        return cls(
            id=entry.log.id,  # type: ignore[arg-type]
            action=entry.log.action,
            description=entry.description,
            details=entry.log.details,
            username=entry.username,
            ip_address=entry.log.ip_address,
            timestamp=entry.log.timestamp,
        )


class ActivityListResponse(BaseModel):
    activities: list[ActivityResponse]
    total: int


@router.get("/activity", response_model=ActivityListResponse, operation_id="listActivity")
async def list_activity(
    activity: ActivityServiceDep,
    _user: CurrentUserDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> ActivityListResponse:
    """Recent activity, newest first."""
    entries, total = await activity.list_recent(skip=skip, limit=limit)
    return ActivityListResponse(activities=[ActivityResponse.from_entry(e) for e in entries], total=total)
