"""ORM model for the append-only login audit trail."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, func, text

from app.models.base import Base


class LoginAttempt(Base):
    """
    One row per unified-login call. Written once, never updated or deleted here.

    guard: 'admin', 'staff', or NULL when no principal matched the email.
    failure_reason: 'not_found', 'bad_password', 'inactive', 'error' (store failure),
    or NULL on success.
    """

    __tablename__ = "login_attempts"
    __table_args__ = (
        Index("ix_login_attempts_email_ip_created", "email", "ip_address", "created_at"),
        Index("ix_login_attempts_email_successful_created", "email", "successful", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)
    ip_address = Column(String(45), nullable=False)
    user_agent = Column(String(255), nullable=True)
    guard = Column(String(32), nullable=True)
    successful = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    failure_reason = Column(String(32), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
