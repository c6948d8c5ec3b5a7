"""SQLAlchemy ORM models."""

from conference.models.account import ParticipantAccount
from conference.models.base import Base
from conference.models.participant import Participant
from conference.models.reviewer import Reviewer
from conference.models.staff import StaffAccount

__all__ = ["Base", "Participant", "ParticipantAccount", "Reviewer", "StaffAccount"]
