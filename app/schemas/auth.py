"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN
from app.services.guards import GuardName

# Shape check only; the login core does not re-validate addresses.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    """Credentials for the unified login."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=EMAIL_MAX_LEN,
        pattern=EMAIL_PATTERN,
        description="Email of an admin or staff account",
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")
    remember: bool = Field(default=False, description="Keep the session after the browser closes")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class LoginResult(BaseModel):
    """Outcome of a successful unified login."""

    guard: GuardName
    destination: str = Field(..., description="Symbolic route name, e.g. admin-dashboard")
    principal_id: int


class LoginResponse(BaseModel):
    """Returned after a successful login; the token is also set as a cookie."""

    guard: GuardName
    destination: str = Field(..., description="Symbolic route name to redirect to")
    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentPrincipal(BaseModel):
    """Authenticated principal (guard, id, name, email) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    guard: GuardName
    id: int
    name: str
    email: str
