"""Core configuration, database session and localized messages."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.messages import auth_failed_message

__all__ = ["auth_failed_message", "get_db", "get_settings", "settings"]
