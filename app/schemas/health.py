"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Credential store connectivity when check is performed",
    )
    session_driver: Literal["database", "memory"] = Field(
        default="database",
        description="Where guard sessions are stored",
    )
    login_throttle: bool = Field(
        default=True,
        description="Whether the unified-login throttle is active",
    )
