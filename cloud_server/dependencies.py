from fastapi import Request

from cloud_server.services.control.base import ServerController
from cloud_server.services.metrics.base import MetricsProvider


def get_metrics_provider(request: Request) -> MetricsProvider:
    """Return the metrics provider stored on app state by create_app."""
    return request.app.state.metrics_provider


def get_server_controller(request: Request) -> ServerController:
    """Return the server controller stored on app state by create_app."""
    return request.app.state.server_controller
