"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentPrincipal,
    LoginRequest,
    LoginResponse,
    LoginResult,
)
from app.schemas.health import HealthResponse
from app.schemas.login_attempt import LoginAttemptRecord, RequestContext

__all__ = [
    "CurrentPrincipal",
    "HealthResponse",
    "LoginAttemptRecord",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "RequestContext",
]
