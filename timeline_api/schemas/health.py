"""
Health check response schema.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health and GET /v1/health"""

    status: Literal["ok"] = Field(
        default="ok",
        description="The service holds no models or connections, so a "
                    "responding process is a healthy one.",
    )
    version: str = Field(description="Service version string.", examples=["1.0.0"])
    environment: str = Field(examples=["production"])
    uptime_seconds: float = Field(description="Seconds since the process started.")
    auth_enabled: bool = Field(description="True when X-Api-Key is enforced.")
