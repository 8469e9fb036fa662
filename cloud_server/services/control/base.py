from abc import ABC, abstractmethod

from cloud_server.schemas.control import ControlResult


class ServerController(ABC):
    """Lifecycle control for the managed server instance."""

    @abstractmethod
    async def start(self) -> ControlResult:
        ...

    @abstractmethod
    async def stop(self) -> ControlResult:
        ...

    @abstractmethod
    async def restart(self) -> ControlResult:
        ...

