"""EDI upload API package."""

from edi_dashboard.api.v1.edi.routes import router

__all__ = ["router"]
