import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cloud_server.config import Settings
from cloud_server.main import create_app
from tests.mocks.fake_providers import FakeMetricsProvider, FakeServerController


@pytest.fixture
def app_settings():
    """Development-mode settings with the bundled public directory."""
    return Settings(environment="development", metrics_provider="mock", control_backend="simulated")


@pytest.fixture
def make_app(app_settings):
    """Factory building an app from the test settings plus overrides."""

    def _make(**overrides):
        cfg = app_settings.model_copy(update=overrides) if overrides else app_settings
        return create_app(cfg)

    return _make


@pytest.fixture
def app(make_app):
    """App with the default mock metrics provider and simulated controller."""
    return make_app()


@pytest.fixture
def fake_metrics():
    return FakeMetricsProvider()


@pytest.fixture
def fake_controller():
    return FakeServerController()


@pytest.fixture
def fake_app(make_app, fake_metrics, fake_controller):
    """App wired to in-memory fakes: fixed stats, instant control actions."""
    app = make_app()
    app.state.metrics_provider = fake_metrics
    app.state.server_controller = fake_controller
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def fake_client(fake_app):
    transport = ASGITransport(app=fake_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
