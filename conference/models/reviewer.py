"""ORM model for reviewer applications."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from conference.models.base import Base


class Reviewer(Base):
    """
    Application to review for the conference.

    status: 'pending', 'approved' or 'rejected'. expertise is stored comma-separated.
    """

    __tablename__ = "reviewers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(40), nullable=True)
    affiliation = Column(String(255), nullable=False)
    expertise = Column(Text, nullable=False, default="")
    experience = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default="pending", index=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    rejected_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
