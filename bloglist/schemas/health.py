from typing import Literal

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Service status reported by `/health`."""

    status: Literal["ok", "degraded"]
    database: Literal["connected", "unreachable"]
