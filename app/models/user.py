"""ORM model for staff accounts (auth and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class User(Base):
    """
    Staff account for session authentication and role-based access control.

    role: 1 (Admin) or 2 (Superadmin); see app.core.authorization.Role.
    email is stored lowercased so lookups compare case-insensitively.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(Integer, nullable=False, default=1)
    # One outstanding reset token per user; a new request overwrites the old one.
    password_reset_token = Column(String(64), nullable=True, index=True)
    password_reset_expires = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
