from datetime import datetime, timezone

from fastapi import APIRouter

from cloud_server.schemas.health import HealthResponse
from cloud_server.services.uptime import get_api_uptime_seconds

router = APIRouter()


@router.get("/api/health")
async def health_check() -> HealthResponse:
    """Liveness probe: status, current time, and process uptime in seconds."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=get_api_uptime_seconds(),
    )
