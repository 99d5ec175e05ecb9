"""Login, logout and session status endpoints."""

from dataclasses import replace
from datetime import datetime

import structlog
from fastapi import APIRouter, HTTPException, Request

from edi_dashboard.api.v1.auth.schemas import (
    AuthStatusResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PermissionsResponse,
    UserInfoResponse,
)
from edi_dashboard.api.v1.dependencies import (
    SESSION_ID,
    SESSION_LOGIN_TIME,
    SESSION_ROLE,
    SESSION_USER_ID,
    SESSION_USERNAME,
    ActivityServiceDep,
    AuthServiceDep,
    CurrentUserDep,
    OptionalUserDep,
    build_activity_context,
)
from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.models.types import new_ulid
from edi_dashboard.services.auth.exceptions import InvalidCredentials
from edi_dashboard.utils.datetime_utils import utc_now

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, operation_id="login")
async def login(
    body: LoginRequest,
    request: Request,
    service: AuthServiceDep,
    activity: ActivityServiceDep,
) -> LoginResponse:
    """Authenticate and start a session."""
    try:
        user = await service.authenticate(body.username, body.password)
    except InvalidCredentials:
        await activity.record(
            build_activity_context(request),
            ActivityAction.LOGIN_FAILED,
            f"Failed login for {body.username}",
        )
        raise HTTPException(status_code=401, detail="Invalid username or password")

    # Fresh session on login
    request.session.clear()
    request.session.update(
        {
            SESSION_USER_ID: user.user_id,
            SESSION_USERNAME: user.username,
            SESSION_ROLE: user.role.value,
            SESSION_ID: new_ulid(),
            SESSION_LOGIN_TIME: utc_now().isoformat(),
        }
    )

    await activity.record(
        replace(build_activity_context(request), user_id=user.user_id),
        ActivityAction.LOGIN_SUCCESS,
        user.username,
    )
    return LoginResponse(username=user.username, role=user.role)


@router.post("/logout", response_model=MessageResponse, operation_id="logout")
async def logout(request: Request, user: OptionalUserDep, activity: ActivityServiceDep) -> MessageResponse:
    """End the session. Logging out without a session is a no-op."""
    if user is not None:
        await activity.record(build_activity_context(request, user), ActivityAction.LOGOUT, user.username)
        logger.info("User logged out", username=user.username)
    request.session.clear()
    return MessageResponse(message="Logged out")


@router.get("/status", response_model=AuthStatusResponse, operation_id="authStatus")
async def auth_status(request: Request, user: OptionalUserDep) -> AuthStatusResponse:
    """Whether the request carries an authenticated session."""
    if user is None:
        return AuthStatusResponse(authenticated=False)

    login_time_raw = request.session.get(SESSION_LOGIN_TIME)
    return AuthStatusResponse(
        authenticated=True,
        username=user.username,
        user_id=user.user_id,
        login_time=datetime.fromisoformat(login_time_raw) if login_time_raw else None,
    )


@router.get("/me", response_model=UserInfoResponse, operation_id="currentUser")
async def current_user(user: CurrentUserDep) -> UserInfoResponse:
    """Current user with dashboard permissions."""
    return UserInfoResponse(
        username=user.username,
        role=user.role,
        permissions=PermissionsResponse(can_view=True, can_edit=user.is_admin),
    )
