"""Schemas for login audit records and the request metadata they carry."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

UNKNOWN_IP = "unknown"


class RequestContext(BaseModel):
    """Client metadata of the inbound login request."""

    ip_address: str = Field(default=UNKNOWN_IP, max_length=45)
    user_agent: str | None = Field(default=None, description="Truncated User-Agent header")


class LoginAttemptRecord(BaseModel):
    """Immutable audit record of a single unified-login call."""

    model_config = {"frozen": True}

    email: str
    ip_address: str
    user_agent: str | None = None
    guard: str | None = Field(default=None, description="admin, staff, or None if no principal matched")
    successful: bool
    failure_reason: str | None = Field(
        default=None,
        description="not_found, bad_password or inactive; None on success",
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
