"""Forecast and chart API package.

- forecast_routes: forecast entries, delivery dates and stats
- chart_routes: combined order/forecast chart data
"""

from fastapi import APIRouter

from edi_dashboard.api.v1.forecast.chart_routes import router as chart_router
from edi_dashboard.api.v1.forecast.forecast_routes import router as forecast_router

router = APIRouter()

router.include_router(forecast_router)
router.include_router(chart_router)

__all__ = ["router"]
