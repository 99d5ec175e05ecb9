"""Authentication API package."""

from edi_dashboard.api.v1.auth.routes import router

__all__ = ["router"]
