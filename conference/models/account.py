"""ORM model for participant-domain accounts (attendees, reviewers, speakers, committee)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from conference.models.base import Base


class ParticipantAccount(Base):
    """
    Login identity for the public site. Tokens for these accounts are signed in the participant domain.

    role: 'participant', 'reviewer', 'speaker' or 'committee'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    phone = Column(String(40), nullable=True)
    country = Column(String(120), nullable=True)
    affiliation = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default="participant")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
