"""Version 1 of the dashboard API."""

from fastapi import APIRouter

from edi_dashboard.api.v1 import activity, auth, edi, forecast, health, orders

router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(edi.router)
router.include_router(orders.router)
router.include_router(forecast.router)
router.include_router(activity.router)

__all__ = ["router"]
