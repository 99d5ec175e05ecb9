"""FastAPI dependencies for service injection and session authentication."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.config import settings
from edi_dashboard.db import Database, get_database, get_session
from edi_dashboard.models.enums import UserRole
from edi_dashboard.models.types import new_ulid
from edi_dashboard.services.activity.activity_service import ActivityContext, ActivityLogService
from edi_dashboard.services.auth.auth_service import AuthService
from edi_dashboard.services.edi.upload_service import EdiUploadService
from edi_dashboard.services.forecast.chart_service import ChartService
from edi_dashboard.services.forecast.forecast_service import ForecastService
from edi_dashboard.services.orders.order_service import OrderService
from edi_dashboard.services.orders.status_service import OrderStatusService
from edi_dashboard.utils.request_helpers import get_client_ip, get_user_agent

SessionDep = Annotated[AsyncSession, Depends(get_session)]
DatabaseDep = Annotated[Database, Depends(get_database)]

# Keys stored in the signed session cookie
SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"
SESSION_ROLE = "role"
SESSION_ID = "sid"
SESSION_LOGIN_TIME = "login_time"


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated user as recorded in the session."""

    user_id: int | None
    username: str
    role: UserRole
    session_id: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_session_id(request: Request) -> str:
    """Session identifier for the activity log, allocated on first use."""
    sid = request.session.get(SESSION_ID)
    if not sid:
        sid = new_ulid()
        request.session[SESSION_ID] = sid
    return str(sid)


def get_optional_user(request: Request) -> CurrentUser | None:
    """Current user, or None when the request carries no authenticated session."""
    username = request.session.get(SESSION_USERNAME)
    if not username:
        return None
    try:
        role = UserRole(request.session.get(SESSION_ROLE, UserRole.USER))
    except ValueError:
        role = UserRole.USER
    return CurrentUser(
        user_id=request.session.get(SESSION_USER_ID),
        username=username,
        role=role,
        session_id=get_session_id(request),
    )


def get_current_user(user: Annotated[CurrentUser | None, Depends(get_optional_user)]) -> CurrentUser:
    """Require an authenticated session."""
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def get_admin_user(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    """Require an authenticated admin session."""
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin permissions required")
    return user


OptionalUserDep = Annotated[CurrentUser | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
AdminUserDep = Annotated[CurrentUser, Depends(get_admin_user)]


def build_activity_context(request: Request, user: CurrentUser | None = None) -> ActivityContext:
    """Who/where for an activity log entry."""
    return ActivityContext(
        session_id=user.session_id if user else get_session_id(request),
        user_id=user.user_id if user else None,
        user_agent=get_user_agent(request),
        ip_address=get_client_ip(request),
    )


def get_activity_context(request: Request, user: OptionalUserDep) -> ActivityContext:
    return build_activity_context(request, user)


def get_activity_service(database: DatabaseDep) -> ActivityLogService:
    """Get an ActivityLogService writing through its own sessions."""
    return ActivityLogService(database.session_maker)


ActivityContextDep = Annotated[ActivityContext, Depends(get_activity_context)]
ActivityServiceDep = Annotated[ActivityLogService, Depends(get_activity_service)]


async def get_order_service(session: SessionDep) -> OrderService:
    """Get an OrderService instance with the current session."""
    return OrderService(session)


async def get_status_service(session: SessionDep) -> OrderStatusService:
    """Get an OrderStatusService instance with the current session."""
    return OrderStatusService(session)


async def get_upload_service(session: SessionDep, activity: ActivityServiceDep) -> EdiUploadService:
    """Get an EdiUploadService configured from settings."""
    return EdiUploadService(
        session,
        activity,
        encoding=settings.edi_encoding,
        allowed_extensions=settings.edi_allowed_extensions,
        max_size=settings.edi_max_upload_bytes,
    )


async def get_forecast_service(session: SessionDep) -> ForecastService:
    """Get a ForecastService instance with the current session."""
    return ForecastService(session)


async def get_chart_service(session: SessionDep) -> ChartService:
    """Get a ChartService instance with the current session."""
    return ChartService(session)


async def get_auth_service(session: SessionDep) -> AuthService:
    """Get an AuthService instance with the current session."""
    return AuthService(session)


# Type aliases for cleaner endpoint signatures
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
StatusServiceDep = Annotated[OrderStatusService, Depends(get_status_service)]
UploadServiceDep = Annotated[EdiUploadService, Depends(get_upload_service)]
ForecastServiceDep = Annotated[ForecastService, Depends(get_forecast_service)]
ChartServiceDep = Annotated[ChartService, Depends(get_chart_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
