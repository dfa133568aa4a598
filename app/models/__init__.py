"""SQLAlchemy ORM models."""

from app.models.admin import Admin
from app.models.base import Base
from app.models.guard_session import GuardSessionRecord
from app.models.login_attempt import LoginAttempt
from app.models.staff import Staff

__all__ = ["Admin", "Base", "GuardSessionRecord", "LoginAttempt", "Staff"]
