from fastapi import APIRouter, Depends

from cloud_server.dependencies import get_metrics_provider
from cloud_server.schemas.stats import StatsSnapshot
from cloud_server.services.metrics.base import MetricsProvider

router = APIRouter()


@router.get("/api/stats")
async def server_stats(
    provider: MetricsProvider = Depends(get_metrics_provider),
) -> StatsSnapshot:
    """CPU, memory, disk, network, and uptime snapshot."""
    return await provider.collect()
