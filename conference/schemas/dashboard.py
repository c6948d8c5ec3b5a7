"""Pydantic schemas for dashboard aggregation responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ParticipantStats(BaseModel):
    total_participants: int
    onsite_with_paper: int
    online_with_paper: int
    attendance_only: int
    payment_completed: int


class PaymentStats(BaseModel):
    total_participants: int
    payment_completed: int
    payment_pending: int
    payment_cancelled: int
    completion_rate: float = Field(..., ge=0, le=100, description="Completed share in percent; 0 when empty")


class ReviewerStats(BaseModel):
    pending: int
    approved: int
    rejected: int


class OverviewStats(BaseModel):
    total_participants: int
    paid_participants: int
    online_participants: int
    onsite_participants: int
    total_reviewers: int
    pending_reviewers: int


class CountryCount(BaseModel):
    country: str
    count: int


class RecentParticipant(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    registration_type: str
    payment_status: str
    created_at: datetime | None = None


class RecentReviewer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    status: str
    created_at: datetime | None = None


class RecentActivity(BaseModel):
    recent_participants: list[RecentParticipant]
    recent_reviewers: list[RecentReviewer]
