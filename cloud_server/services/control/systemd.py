import asyncio
import platform

import structlog

from cloud_server.schemas.control import ControlAction, ControlResult
from cloud_server.services.control.base import ServerController

logger = structlog.get_logger()

PAST_TENSE: dict[str, str] = {
    "start": "started",
    "stop": "stopped",
    "restart": "restarted",
}


class SystemdServerController(ServerController):
    """Controls a systemd unit through ``systemctl``."""

    def __init__(self, unit: str, systemctl: str = "systemctl"):
        self.unit = unit
        self.systemctl = systemctl

    async def _systemctl(self, action: ControlAction) -> ControlResult:
        if platform.system() != "Linux":
            return ControlResult(success=False, message="systemd control is only available on Linux")

        logger.info("control_action", action=action, backend="systemd", unit=self.unit)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.systemctl,
                action,
                self.unit,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate()
        except OSError as e:
            logger.warning("control_action_failed", action=action, unit=self.unit, error=str(e))
            return ControlResult(success=False, message=f"Could not run {self.systemctl}: {e}")

        if proc.returncode != 0:
            error = stderr.decode(errors="replace").strip()
            logger.warning("control_action_failed", action=action, unit=self.unit, error=error)
            return ControlResult(
                success=False,
                message=error or f"{self.systemctl} {action} {self.unit} exited with {proc.returncode}",
            )

        return ControlResult(success=True, message=f"Server {PAST_TENSE[action]} successfully")

    async def start(self) -> ControlResult:
        return await self._systemctl("start")

    async def stop(self) -> ControlResult:
        return await self._systemctl("stop")

    async def restart(self) -> ControlResult:
        return await self._systemctl("restart")
