import random

from cloud_server.schemas.stats import CpuStats, DiskStats, NetworkStats, StatsSnapshot
from cloud_server.services.metrics.base import MetricsProvider, read_memory, read_uptime

MOCK_DISK_TOTAL_GB = 500


class MockMetricsProvider(MetricsProvider):
    """Real memory and uptime; CPU, disk, and network are synthetic.

    A seeded ``random.Random`` can be passed in for reproducible output.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    async def collect(self) -> StatsSnapshot:
        rng = self._rng
        return StatsSnapshot(
            cpu=CpuStats(usage=rng.randrange(0, 100)),
            memory=read_memory(),
            disk=DiskStats(
                total=MOCK_DISK_TOTAL_GB,
                used=rng.randrange(100, 300),
                free=rng.randrange(100, 300),
            ),
            network=NetworkStats(traffic=round(rng.random() * 10, 1)),
            uptime=read_uptime(),
        )
