"""Chart data endpoint."""

from fastapi import APIRouter

from edi_dashboard.api.v1.dependencies import ChartServiceDep, CurrentUserDep
from edi_dashboard.api.v1.forecast.schemas import ChartDataResponse

router = APIRouter(tags=["chart"])


@router.get("/chart-data", response_model=ChartDataResponse, operation_id="getChartData")
async def get_chart_data(service: ChartServiceDep, _user: CurrentUserDep) -> ChartDataResponse:
    """Order and forecast load for the stacked chart."""
    return ChartDataResponse.from_data(await service.get_chart_data())
