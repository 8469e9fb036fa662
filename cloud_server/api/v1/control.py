from fastapi import APIRouter, Depends

from cloud_server.core.body import parse_request_body
from cloud_server.dependencies import get_server_controller
from cloud_server.schemas.control import ControlResult
from cloud_server.services.control.base import ServerController

# Bodies are decoded (and rejected with 400 if malformed) but not otherwise used.
router = APIRouter(prefix="/api/control", dependencies=[Depends(parse_request_body)])


@router.post("/start")
async def start_server(
    controller: ServerController = Depends(get_server_controller),
) -> ControlResult:
    return await controller.start()


@router.post("/stop")
async def stop_server(
    controller: ServerController = Depends(get_server_controller),
) -> ControlResult:
    return await controller.stop()


@router.post("/restart")
async def restart_server(
    controller: ServerController = Depends(get_server_controller),
) -> ControlResult:
    return await controller.restart()
