"""Database models."""

from edi_dashboard.models.activity import ActivityLog
from edi_dashboard.models.enums import ActivityAction, EdiOrderStatus, UserRole
from edi_dashboard.models.forecast import FORECAST_KEY_CONSTRAINT, ForecastEntry
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.models.user import User

__all__ = [
    "FORECAST_KEY_CONSTRAINT",
    "ActivityAction",
    "ActivityLog",
    "EdiOrder",
    "EdiOrderStatus",
    "ForecastEntry",
    "User",
    "UserRole",
]
