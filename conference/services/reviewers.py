"""Reviewer applications: submit, approve or reject, list."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from conference.core.errors import InvalidTransition, NotFound, ValidationError
from conference.models import Reviewer
from conference.schemas.reviewer import ReviewerApplication
from conference.services.pagination import clamp_pagination

logger = logging.getLogger(__name__)

# Decisions are final; only pending applications can be decided.
DECISION_STATUSES = frozenset({"approved", "rejected"})


def apply(db: Session, details: ReviewerApplication) -> Reviewer:
    reviewer = Reviewer(
        full_name=details.full_name.strip(),
        email=details.email,
        phone=details.phone,
        affiliation=details.affiliation.strip(),
        expertise=",".join(details.expertise),
        experience=details.experience,
        bio=details.bio,
        status="pending",
    )
    db.add(reviewer)
    db.commit()
    db.refresh(reviewer)
    logger.info("Reviewer application received: id=%s", reviewer.id)
    return reviewer


def get(db: Session, reviewer_id: int) -> Reviewer:
    reviewer = db.get(Reviewer, reviewer_id)
    if reviewer is None:
        raise NotFound("Reviewer not found")
    return reviewer


def set_status(
    db: Session,
    reviewer_id: int,
    status: str,
    reason: str | None = None,
    now: datetime | None = None,
) -> Reviewer:
    """Approve or reject a pending application. Raises InvalidTransition if it was already decided."""
    if status not in DECISION_STATUSES:
        raise ValidationError(f"status must be one of {sorted(DECISION_STATUSES)}")
    reviewer = get(db, reviewer_id)
    if reviewer.status != "pending":
        raise InvalidTransition(f"Reviewer application is already {reviewer.status}")
    reviewer.status = status
    if status == "approved":
        reviewer.approved_at = now or datetime.now(UTC)
        reviewer.rejected_reason = None
    else:
        reviewer.rejected_reason = reason
    db.commit()
    db.refresh(reviewer)
    logger.info("Reviewer application %s: id=%s", status, reviewer.id)
    return reviewer


def list_all(
    db: Session, page: int, page_size: int, status: str | None = None
) -> tuple[list[Reviewer], int]:
    """One page of applications, newest first, optionally filtered by status."""
    page, page_size, offset = clamp_pagination(page, page_size)
    query = db.query(Reviewer)
    if status is not None:
        query = query.filter(Reviewer.status == status)
    total = query.count()
    records = (
        query.order_by(Reviewer.created_at.desc(), Reviewer.id.desc())
        .offset(offset)
        .limit(page_size)
        .all()
    )
    return records, total
