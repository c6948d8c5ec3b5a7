"""Reviewer application endpoints: public application form, staff listing and decisions."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from conference.api.deps import CommitteeMember, StaffAuth, StaffEditor
from conference.core.database import get_db
from conference.schemas.envelope import ApiResponse, Page, PaginationMeta, success_response
from conference.schemas.reviewer import ReviewerApplication, ReviewerOut, ReviewerStatusUpdate
from conference.services import reviewers
from conference.services.notifications import deliver_safely, send_reviewer_invitation
from conference.services.pagination import clamp_pagination

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ReviewerOut],
    status_code=status.HTTP_201_CREATED,
)
def apply_as_reviewer(
    body: ReviewerApplication,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ReviewerOut]:
    reviewer = reviewers.apply(db, body)
    return success_response(
        "Reviewer application submitted", ReviewerOut.model_validate(reviewer), status.HTTP_201_CREATED
    )


@router.get("", response_model=ApiResponse[Page[ReviewerOut]])
def list_reviewers(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> ApiResponse[Page[ReviewerOut]]:
    page, limit, _ = clamp_pagination(page, limit)
    records, total = reviewers.list_all(db, page, limit)
    return success_response(
        "Reviewers retrieved",
        Page(
            data=[ReviewerOut.model_validate(r) for r in records],
            meta=PaginationMeta.build(total, page, limit),
        ),
    )


@router.get("/approved", response_model=ApiResponse[Page[ReviewerOut]])
def list_approved_reviewers(
    _member: CommitteeMember,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> ApiResponse[Page[ReviewerOut]]:
    """Approved reviewer pool, for participant accounts with the committee or reviewer role."""
    page, limit, _ = clamp_pagination(page, limit)
    records, total = reviewers.list_all(db, page, limit, status="approved")
    return success_response(
        "Approved reviewers retrieved",
        Page(
            data=[ReviewerOut.model_validate(r) for r in records],
            meta=PaginationMeta.build(total, page, limit),
        ),
    )


@router.patch("/{reviewer_id}/status", response_model=ApiResponse[ReviewerOut])
def set_reviewer_status(
    reviewer_id: int,
    body: ReviewerStatusUpdate,
    _staff: StaffEditor,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ReviewerOut]:
    """Approve or reject a pending application. Approval sends the invitation email after the response."""
    reviewer = reviewers.set_status(db, reviewer_id, body.status, body.reason)
    if reviewer.status == "approved":
        background_tasks.add_task(
            deliver_safely, send_reviewer_invitation, reviewer.email, reviewer.full_name
        )
    return success_response(f"Reviewer {reviewer.status}", ReviewerOut.model_validate(reviewer))
