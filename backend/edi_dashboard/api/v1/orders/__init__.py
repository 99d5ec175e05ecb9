"""Orders API package.

- order_routes: listing, stats and admin deletion
- status_routes: status assignment and advance
"""

from fastapi import APIRouter

from edi_dashboard.api.v1.orders.order_routes import router as order_router
from edi_dashboard.api.v1.orders.status_routes import router as status_router

router = APIRouter()

router.include_router(order_router)
router.include_router(status_router)

__all__ = ["router"]
