"""Activity log API package."""

from edi_dashboard.api.v1.activity.routes import router

__all__ = ["router"]
