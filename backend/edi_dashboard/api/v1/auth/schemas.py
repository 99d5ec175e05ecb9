"""API schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from edi_dashboard.models.enums import UserRole


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    username: str
    role: UserRole


class AuthStatusResponse(BaseModel):
    """Session state, available without logging in."""

    authenticated: bool
    username: str | None = None
    user_id: int | None = None
    login_time: datetime | None = None


class PermissionsResponse(BaseModel):
    can_view: bool
    can_edit: bool


class UserInfoResponse(BaseModel):
    username: str
    role: UserRole
    permissions: PermissionsResponse


class MessageResponse(BaseModel):
    message: str
