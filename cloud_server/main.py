from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from cloud_server.api.v1.router import v1_router
from cloud_server.config import Settings, settings as default_settings
from cloud_server.core.exceptions import CloudServerError, NotFoundError, cloud_error_handler, http_exception_handler
from cloud_server.core.middleware import (
    AllowAllOriginsMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from cloud_server.services.factory import build_metrics_provider, build_server_controller

_NAME_TO_LEVEL = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "warn": 30,
    "error": 40,
    "critical": 50,
}

structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _NAME_TO_LEVEL.get(default_settings.log_level.lower(), 20)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    cfg: Settings = app.state.settings
    logger.info(
        "cloud_server_starting",
        port=cfg.port,
        environment=cfg.environment,
        metrics_provider=cfg.metrics_provider,
        control_backend=cfg.control_backend,
    )
    yield
    logger.info("cloud_server_stopping")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its telemetry provider and controller on app state."""
    cfg = settings or default_settings
    public_dir = cfg.public_dir

    app = FastAPI(
        title="Cloud Server",
        description="Health, statistics, and control API for a cloud server instance",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.metrics_provider = build_metrics_provider(cfg)
    app.state.server_controller = build_server_controller(cfg)

    # Exception handlers
    app.add_exception_handler(CloudServerError, cloud_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Middleware (Starlette: last-added = outermost. Execution order top to bottom.)
    # 1. RequestLogging (outermost) - logs every response, including errors
    # 2. SecurityHeaders - hardening headers on everything below, preflights included
    # 3. AllowAllOrigins - only with a "*" policy: ACAO on every response, bare OPTIONS answered
    # 4. CORS - preflights and Origin-bearing requests
    # 5. GZip
    # 6. UnhandledError (innermost) - 500 body for uncaught exceptions
    app.add_middleware(UnhandledErrorMiddleware, production=cfg.is_production)
    app.add_middleware(GZipMiddleware, minimum_size=cfg.gzip_minimum_size)
    origins = [o.strip() for o in cfg.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if "*" in origins:
        app.add_middleware(AllowAllOriginsMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Routes
    app.include_router(v1_router)

    @app.get("/", include_in_schema=False)
    async def root() -> FileResponse:
        index = public_dir / "index.html"
        if not index.is_file():
            raise NotFoundError("/")
        return FileResponse(index)

    # Must stay last: the mount matches every remaining path.
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir), name="public")
    else:
        logger.warning("public_dir_missing", path=str(public_dir))

    return app


app = create_app()
