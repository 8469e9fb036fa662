from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

ControlAction = Literal["start", "stop", "restart"]


class ControlResult(BaseModel):
    success: bool
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
