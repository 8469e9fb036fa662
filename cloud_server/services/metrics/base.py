from abc import ABC, abstractmethod

import psutil

from cloud_server.schemas.stats import MemoryStats, StatsSnapshot, UptimeStats
from cloud_server.services.uptime import format_uptime, get_api_uptime_seconds, get_os_uptime_seconds

BYTES_PER_MB = 1024 * 1024


class MetricsProvider(ABC):
    @abstractmethod
    async def collect(self) -> StatsSnapshot:
        """Take a point-in-time resource usage snapshot."""
        ...


def read_memory() -> MemoryStats:
    """Host memory in MB from a single psutil query. Usage is derived from free/total."""
    mem = psutil.virtual_memory()
    free = min(mem.available, mem.total)
    return MemoryStats(
        total=mem.total // BYTES_PER_MB,
        free=free // BYTES_PER_MB,
        usage=round((1 - free / mem.total) * 100),
    )


def read_uptime() -> UptimeStats:
    return UptimeStats(
        server=format_uptime(get_api_uptime_seconds()),
        system=format_uptime(get_os_uptime_seconds()),
    )
