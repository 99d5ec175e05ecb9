"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from edi_dashboard.api.v1.dependencies import DatabaseDep
from edi_dashboard.utils.datetime_utils import to_api_timezone, utc_now

router = APIRouter(tags=["health"])


@router.get("/health", operation_id="healthCheck", response_model=None)
async def health_check(database: DatabaseDep) -> dict[str, str] | JSONResponse:
    """Health check endpoint, including a database round trip."""
    now = to_api_timezone(utc_now())
    assert now is not None
    if not await database.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "error", "timestamp": now.isoformat()},
        )
    return {"status": "healthy", "database": "connected", "timestamp": now.isoformat()}
