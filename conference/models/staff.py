"""ORM model for staff-domain accounts (admin back office)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from conference.models.base import Base


class StaffAccount(Base):
    """
    Back-office identity. Tokens for these accounts are signed in the staff domain.

    role: 'admin', 'super-admin' or 'moderator'. Deactivated instead of deleted.
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    role = Column(String(32), nullable=False, default="admin")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
