import asyncio

import structlog

from cloud_server.schemas.control import ControlAction, ControlResult
from cloud_server.services.control.base import ServerController

logger = structlog.get_logger()

MESSAGES: dict[str, str] = {
    "start": "Server started successfully",
    "stop": "Server stopped successfully",
    "restart": "Server restarted successfully",
}


class SimulatedServerController(ServerController):
    """Stand-in controller: waits for a fixed delay, then reports success.

    The wait is a plain ``asyncio.sleep`` so cancelling the awaiting task
    cancels the action. Nothing outside this process is touched.
    """

    def __init__(self, start_delay: float = 1.0, stop_delay: float = 1.0, restart_delay: float = 2.0):
        self.delays: dict[str, float] = {
            "start": start_delay,
            "stop": stop_delay,
            "restart": restart_delay,
        }

    async def _simulate(self, action: ControlAction) -> ControlResult:
        delay = self.delays[action]
        logger.info("control_action", action=action, backend="simulated", delay_seconds=delay)
        await asyncio.sleep(delay)
        return ControlResult(success=True, message=MESSAGES[action])

    async def start(self) -> ControlResult:
        return await self._simulate("start")

    async def stop(self) -> ControlResult:
        return await self._simulate("stop")

    async def restart(self) -> ControlResult:
        return await self._simulate("restart")
