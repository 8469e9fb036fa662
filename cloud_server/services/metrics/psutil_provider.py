import time
from collections.abc import Callable

import psutil

from cloud_server.schemas.stats import CpuStats, DiskStats, NetworkStats, StatsSnapshot
from cloud_server.services.metrics.base import MetricsProvider, read_memory, read_uptime

BYTES_PER_GB = 1024**3


def _to_gb(n_bytes: int) -> int:
    """Whole GB, rounded up so any non-zero amount reports at least 1."""
    return -(-n_bytes // BYTES_PER_GB)


class PsutilMetricsProvider(MetricsProvider):
    """Real host telemetry via psutil.

    Network traffic is the combined send/receive rate since the previous
    call, in megabits per second. The first call has no baseline and
    reports 0.0.
    """

    def __init__(self, disk_path: str = "/", clock: Callable[[], float] = time.monotonic):
        self.disk_path = disk_path
        self._clock = clock
        self._last_net: tuple[int, float] | None = None
        # cpu_percent(interval=None) returns 0.0 on its first call; take it here.
        psutil.cpu_percent(interval=None)

    def _network_mbps(self) -> float:
        counters = psutil.net_io_counters()
        if counters is None:
            # No network interfaces to read
            self._last_net = None
            return 0.0
        total_bytes = counters.bytes_sent + counters.bytes_recv
        now = self._clock()

        previous, self._last_net = self._last_net, (total_bytes, now)
        if previous is None:
            return 0.0

        prev_bytes, prev_time = previous
        elapsed = now - prev_time
        if elapsed <= 0 or total_bytes < prev_bytes:
            # Counter wrap or interface reset
            return 0.0
        return round((total_bytes - prev_bytes) * 8 / 1_000_000 / elapsed, 1)

    async def collect(self) -> StatsSnapshot:
        cpu_pct = psutil.cpu_percent(interval=None)
        disk = psutil.disk_usage(self.disk_path)

        return StatsSnapshot(
            cpu=CpuStats(usage=min(100, max(0, round(cpu_pct)))),
            memory=read_memory(),
            disk=DiskStats(
                total=_to_gb(disk.total),
                used=_to_gb(disk.used),
                free=_to_gb(disk.free),
            ),
            network=NetworkStats(traffic=self._network_mbps()),
            uptime=read_uptime(),
        )
