"""Dashboard user database model."""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from edi_dashboard.models.enums import USER_ROLE_ENUM, UserRole
from edi_dashboard.utils.datetime_utils import utc_now


class User(SQLModel, table=True):
    """Dashboard login account."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, unique=True, index=True)
    password_hash: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=100)
    role: UserRole = Field(
        default=UserRole.USER,
        sa_column=Column(USER_ROLE_ENUM, nullable=False),
    )
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    last_login: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
