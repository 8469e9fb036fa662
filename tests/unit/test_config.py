from pathlib import Path

import pytest

from cloud_server.config import Settings
from cloud_server.core.exceptions import ConfigurationError
from cloud_server.services.control.simulated import SimulatedServerController
from cloud_server.services.control.systemd import SystemdServerController
from cloud_server.services.factory import build_metrics_provider, build_server_controller
from cloud_server.services.metrics.mock import MockMetricsProvider
from cloud_server.services.metrics.psutil_provider import PsutilMetricsProvider


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PORT", "ENVIRONMENT", "METRICS_PROVIDER", "CONTROL_BACKEND"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.environment == "development"
        assert settings.is_production is False
        assert settings.metrics_provider == "mock"
        assert settings.control_backend == "simulated"
        assert settings.public_dir.name == "public"

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_production_flag_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert Settings(_env_file=None).is_production is True

    def test_public_dir_override(self, tmp_path: Path):
        assert Settings(public_dir=tmp_path).public_dir == tmp_path


class TestBuildMetricsProvider:
    def test_mock(self):
        assert isinstance(build_metrics_provider(Settings(metrics_provider="mock")), MockMetricsProvider)

    def test_psutil(self):
        provider = build_metrics_provider(Settings(metrics_provider="psutil", disk_path="/tmp"))
        assert isinstance(provider, PsutilMetricsProvider)
        assert provider.disk_path == "/tmp"

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            build_metrics_provider(Settings(metrics_provider="prometheus"))


class TestBuildServerController:
    def test_simulated_uses_configured_delays(self):
        controller = build_server_controller(
            Settings(control_backend="simulated", control_start_delay=0.5, control_restart_delay=3.0)
        )
        assert isinstance(controller, SimulatedServerController)
        assert controller.delays["start"] == 0.5
        assert controller.delays["stop"] == 1.0
        assert controller.delays["restart"] == 3.0

    def test_systemd_requires_unit(self):
        with pytest.raises(ConfigurationError):
            build_server_controller(Settings(control_backend="systemd", control_unit=None))

    def test_systemd_with_unit(self):
        controller = build_server_controller(Settings(control_backend="systemd", control_unit="app.service"))
        assert isinstance(controller, SystemdServerController)
        assert controller.unit == "app.service"

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            build_server_controller(Settings(control_backend="docker"))
