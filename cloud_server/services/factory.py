"""Build the telemetry provider and lifecycle controller named by settings."""

from cloud_server.config import Settings
from cloud_server.core.exceptions import ConfigurationError
from cloud_server.services.control.base import ServerController
from cloud_server.services.control.simulated import SimulatedServerController
from cloud_server.services.control.systemd import SystemdServerController
from cloud_server.services.metrics.base import MetricsProvider
from cloud_server.services.metrics.mock import MockMetricsProvider
from cloud_server.services.metrics.psutil_provider import PsutilMetricsProvider


def build_metrics_provider(settings: Settings) -> MetricsProvider:
    name = settings.metrics_provider.strip().lower()
    if name == "mock":
        return MockMetricsProvider()
    if name == "psutil":
        return PsutilMetricsProvider(disk_path=settings.disk_path)
    raise ConfigurationError(f"Unknown metrics provider: {settings.metrics_provider!r} (expected 'mock' or 'psutil')")


def build_server_controller(settings: Settings) -> ServerController:
    name = settings.control_backend.strip().lower()
    if name == "simulated":
        return SimulatedServerController(
            start_delay=settings.control_start_delay,
            stop_delay=settings.control_stop_delay,
            restart_delay=settings.control_restart_delay,
        )
    if name == "systemd":
        if not settings.control_unit:
            raise ConfigurationError("CONTROL_UNIT is required when CONTROL_BACKEND=systemd")
        return SystemdServerController(unit=settings.control_unit)
    raise ConfigurationError(
        f"Unknown control backend: {settings.control_backend!r} (expected 'simulated' or 'systemd')"
    )
