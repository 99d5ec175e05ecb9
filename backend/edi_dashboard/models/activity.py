"""Append-only activity log model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel

from edi_dashboard.utils.datetime_utils import utc_now


class ActivityLog(SQLModel, table=True):
    """One audited user action."""

    __tablename__ = "activity_logs"

    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(max_length=255, index=True)
    user_id: int | None = Field(default=None, foreign_key="users.id")
    action: str = Field(max_length=100, index=True)
    details: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    user_agent: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    ip_address: str | None = Field(default=None, max_length=45)
    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
