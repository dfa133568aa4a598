"""ORM model for staff accounts (the "staff" guard)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, text

from app.models.base import Base


class Staff(Base):
    """Staff principal. Only active rows may authenticate."""

    __tablename__ = "staffs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
