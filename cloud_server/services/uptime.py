"""Process and host uptime, plus the human-readable duration format."""

import platform
import time

import psutil
import structlog

logger = structlog.get_logger()

_api_start = time.monotonic()

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def get_api_uptime_seconds() -> float:
    """Seconds since the API process started. Monotonic, never decreases."""
    return round(time.monotonic() - _api_start, 3)


def get_os_uptime_seconds() -> float:
    """Host uptime from /proc/uptime on Linux, psutil boot time elsewhere."""
    if platform.system() == "Linux":
        try:
            with open("/proc/uptime") as f:
                return float(f.read().split()[0])
        except (OSError, ValueError, IndexError) as e:
            logger.debug("proc_uptime_unavailable", reason=str(e))
    return max(0.0, time.time() - psutil.boot_time())


def _unit(count: int, name: str) -> str:
    # Plural only above one: zero renders singular ("0 minute").
    return f"{count} {name}{'s' if count > 1 else ''}"


def format_uptime(seconds: float) -> str:
    """Render a duration as "N days, N hours, N minutes".

    Days and hours are omitted when zero; minutes are always present.
    """
    days = int(seconds // SECONDS_PER_DAY)
    hours = int(seconds % SECONDS_PER_DAY // SECONDS_PER_HOUR)
    minutes = int(seconds % SECONDS_PER_HOUR // SECONDS_PER_MINUTE)

    result = ""
    if days > 0:
        result += _unit(days, "day") + ", "
    if hours > 0:
        result += _unit(hours, "hour") + ", "
    result += _unit(minutes, "minute")
    return result
