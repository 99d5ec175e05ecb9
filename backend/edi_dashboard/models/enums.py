"""Enum definitions for database models."""

from enum import StrEnum

from sqlalchemy import Enum


class EdiOrderStatus(StrEnum):
    """Production progress of an EDI order.

    The dashboard cycles statuses in this order:
        DEFAULT -> HALF -> THREE_QUARTER -> FINISHED -> DEFAULT

    The server accepts any member as a direct assignment; the cycle is only
    used by the "advance" operation.
    """

    DEFAULT = "default"
    HALF = "half"
    THREE_QUARTER = "three-quarter"
    FINISHED = "finished"

    @property
    def next(self) -> "EdiOrderStatus":
        """Next status along the cycle (FINISHED wraps to DEFAULT)."""
        members = list(EdiOrderStatus)
        return members[(members.index(self) + 1) % len(members)]


class UserRole(StrEnum):
    """Dashboard user role."""

    ADMIN = "admin"
    USER = "user"


class ActivityAction(StrEnum):
    """Actions recorded in the activity log."""

    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"
    EDI_UPLOAD_SUCCESS = "EDI_UPLOAD_SUCCESS"
    EDI_UPLOAD_FAILED = "EDI_UPLOAD_FAILED"
    ORDER_STATUS_UPDATE = "ORDER_STATUS_UPDATE"
    ORDER_DELETE = "ORDER_DELETE"
    FORECAST_BATCH_SAVE = "FORECAST_BATCH_SAVE"
    FORECAST_CLEAR_ALL = "FORECAST_CLEAR_ALL"

    @property
    def description(self) -> str:
        """Human-readable description for the activity feed."""
        return _ACTION_DESCRIPTIONS[self]


_ACTION_DESCRIPTIONS = {
    ActivityAction.LOGIN_SUCCESS: "User logged in successfully",
    ActivityAction.LOGIN_FAILED: "Failed login attempt",
    ActivityAction.LOGOUT: "User logged out",
    ActivityAction.EDI_UPLOAD_SUCCESS: "Successfully uploaded EDI file",
    ActivityAction.EDI_UPLOAD_FAILED: "EDI upload failed",
    ActivityAction.ORDER_STATUS_UPDATE: "Order status updated",
    ActivityAction.ORDER_DELETE: "Order deleted",
    ActivityAction.FORECAST_BATCH_SAVE: "Forecast entries saved",
    ActivityAction.FORECAST_CLEAR_ALL: "All forecast entries cleared",
}


# Stored as VARCHAR (not a native enum type) so the same models run on PostgreSQL and SQLite
EDI_ORDER_STATUS_ENUM = Enum(
    EdiOrderStatus,
    name="edi_order_status",
    native_enum=False,
    length=20,
    values_callable=lambda e: [member.value for member in e],
)

USER_ROLE_ENUM = Enum(
    UserRole,
    name="user_role",
    native_enum=False,
    length=20,
    values_callable=lambda e: [member.value for member in e],
)
