"""ORM model for admin accounts (the "admin" guard)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class Admin(Base):
    """
    Admin principal. Authenticates under the "admin" guard.

    Email is unique within this table only; uniqueness across admins and staffs
    is a write-time rule (see app.services.principals.email_in_use).
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
