from fastapi import APIRouter

from cloud_server.api.v1.control import router as control_router
from cloud_server.api.v1.health import router as health_router
from cloud_server.api.v1.stats import router as stats_router
from cloud_server.schemas.errors import ErrorBody

v1_router = APIRouter(responses={404: {"model": ErrorBody}, 500: {"model": ErrorBody}})

v1_router.include_router(health_router, tags=["Health"])
v1_router.include_router(stats_router, tags=["Stats"])
v1_router.include_router(control_router, tags=["Control"], responses={400: {"model": ErrorBody}})
