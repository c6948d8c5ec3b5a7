"""Pydantic schemas for reviewer applications."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from conference.schemas.auth import lower_email

ReviewerStatus = Literal["pending", "approved", "rejected"]

REVIEWER_STATUSES: frozenset[str] = frozenset({"pending", "approved", "rejected"})


class ReviewerApplication(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=40)
    affiliation: str = Field(..., min_length=1, max_length=255)
    expertise: list[str] = Field(..., min_length=1, max_length=20)
    experience: int | None = Field(default=None, ge=0, le=80)
    bio: str | None = Field(default=None, max_length=5000)

    @field_validator("email", mode="before")
    @classmethod
    def email_lowercase(cls, v: object) -> object:
        return lower_email(v)

    @field_validator("expertise")
    @classmethod
    def validate_expertise(cls, v: list[str]) -> list[str]:
        cleaned = [item.strip() for item in v if item and item.strip()]
        if not cleaned:
            raise ValueError("expertise must contain at least one non-empty entry")
        if any("," in item for item in cleaned):
            raise ValueError("expertise entries must not contain commas")
        return cleaned


class ReviewerStatusUpdate(BaseModel):
    """Approve or reject a pending application."""

    status: Literal["approved", "rejected"]
    reason: str | None = Field(default=None, max_length=2000)


class ReviewerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: str | None = None
    affiliation: str
    expertise: list[str]
    experience: int | None = None
    bio: str | None = None
    status: ReviewerStatus
    approved_at: datetime | None = None
    rejected_reason: str | None = None
    created_at: datetime | None = None

    @field_validator("expertise", mode="before")
    @classmethod
    def split_expertise(cls, v: object) -> object:
        if isinstance(v, str):
            return [item for item in v.split(",") if item]
        return v
