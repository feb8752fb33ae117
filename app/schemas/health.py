"""Health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability, for load balancers."""

    status: Literal["ok", "degraded"] = Field(
        default="ok", description="'degraded' when the database cannot be reached"
    )
    service: str = Field(default="synergysphere")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
