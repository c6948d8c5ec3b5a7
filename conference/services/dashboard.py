"""Read-only aggregation over registrations and reviewer applications for the admin dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from conference.models import Participant, Reviewer
from conference.schemas.dashboard import (
    CountryCount,
    OverviewStats,
    ParticipantStats,
    PaymentStats,
    RecentActivity,
    RecentParticipant,
    RecentReviewer,
    ReviewerStats,
)
from conference.services.pagination import MAX_PAGE_SIZE


def _group_counts(db: Session, column) -> dict[str, int]:
    """Return {value: count} for one column of one table."""
    rows = db.query(column, func.count()).group_by(column).all()
    return {value: count for value, count in rows if value is not None}


def participant_stats(db: Session) -> ParticipantStats:
    by_type = _group_counts(db, Participant.registration_type)
    by_payment = _group_counts(db, Participant.payment_status)
    return ParticipantStats(
        total_participants=sum(by_type.values()),
        onsite_with_paper=by_type.get("onsite-paper", 0),
        online_with_paper=by_type.get("online-paper", 0),
        attendance_only=by_type.get("attendance", 0),
        payment_completed=by_payment.get("completed", 0),
    )


def payment_stats(db: Session) -> PaymentStats:
    by_payment = _group_counts(db, Participant.payment_status)
    total = sum(by_payment.values())
    completed = by_payment.get("completed", 0)
    return PaymentStats(
        total_participants=total,
        payment_completed=completed,
        payment_pending=by_payment.get("pending", 0),
        payment_cancelled=by_payment.get("cancelled", 0),
        completion_rate=round(completed / total * 100, 2) if total else 0.0,
    )


def reviewer_stats(db: Session) -> ReviewerStats:
    by_status = _group_counts(db, Reviewer.status)
    return ReviewerStats(
        pending=by_status.get("pending", 0),
        approved=by_status.get("approved", 0),
        rejected=by_status.get("rejected", 0),
    )


def overview_stats(db: Session) -> OverviewStats:
    by_type = _group_counts(db, Participant.registration_type)
    by_payment = _group_counts(db, Participant.payment_status)
    by_reviewer = _group_counts(db, Reviewer.status)
    return OverviewStats(
        total_participants=sum(by_type.values()),
        paid_participants=by_payment.get("completed", 0),
        online_participants=by_type.get("online-paper", 0),
        onsite_participants=by_type.get("onsite-paper", 0),
        total_reviewers=sum(by_reviewer.values()),
        pending_reviewers=by_reviewer.get("pending", 0),
    )


def countries_distribution(db: Session, limit: int = 10) -> list[CountryCount]:
    """Top countries by number of registrations, most first."""
    limit = min(MAX_PAGE_SIZE, max(1, limit))
    count = func.count(Participant.id).label("count")
    rows = (
        db.query(Participant.country, count)
        .group_by(Participant.country)
        .order_by(count.desc(), Participant.country)
        .limit(limit)
        .all()
    )
    return [CountryCount(country=country, count=n) for country, n in rows]


def recent_activity(db: Session, limit: int = 10) -> RecentActivity:
    limit = min(MAX_PAGE_SIZE, max(1, limit))
    participants = (
        db.query(Participant)
        .order_by(Participant.created_at.desc(), Participant.id.desc())
        .limit(limit)
        .all()
    )
    reviewers = (
        db.query(Reviewer)
        .order_by(Reviewer.created_at.desc(), Reviewer.id.desc())
        .limit(limit)
        .all()
    )
    return RecentActivity(
        recent_participants=[RecentParticipant.model_validate(p) for p in participants],
        recent_reviewers=[RecentReviewer.model_validate(r) for r in reviewers],
    )
