"""ORM model for server-side guard sessions."""

from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class GuardSessionRecord(Base):
    """
    Guard slots of one session, keyed by the id carried in the signed session token.

    guards: {"admin": {"sub": "1", "remember": false}}; deleting the row ends every
    token that names it.
    """

    __tablename__ = "guard_sessions"

    id = Column(String(64), primary_key=True)
    guards = Column(JSONB, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
