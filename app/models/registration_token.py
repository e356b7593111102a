"""ORM model for Superadmin-issued, single-use registration tokens."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, false, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class RegistrationToken(Base):
    """
    One registration code. Usable iff not is_used and expires_at is in the future.

    used_by/used_at are set in the same transaction that claims the token.
    """

    __tablename__ = "registration_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(10), nullable=False, unique=True, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_used = Column(Boolean, nullable=False, default=False, server_default=false())
    used_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    used_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    creator = relationship("User", foreign_keys=[created_by], lazy="joined")
    redeemer = relationship("User", foreign_keys=[used_by], lazy="joined")
