from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["OK"] = "OK"
    timestamp: datetime
    uptime: float  # process uptime, seconds
