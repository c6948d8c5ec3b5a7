"""Participant registration endpoints: self-registration, staff listing, payment updates and deletion."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from conference.api.deps import ParticipantAuth, StaffAuth, StaffEditor
from conference.core.database import get_db
from conference.schemas.dashboard import ParticipantStats
from conference.schemas.envelope import ApiResponse, Page, PaginationMeta, success_response
from conference.schemas.participant import (
    ParticipantCreate,
    ParticipantOut,
    ParticipantUpdate,
    PaymentUpdateRequest,
)
from conference.services import dashboard, registration
from conference.services.notifications import deliver_safely, send_registration_confirmation
from conference.services.pagination import clamp_pagination

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ParticipantOut],
    status_code=status.HTTP_201_CREATED,
)
def register_participant(
    body: ParticipantCreate,
    claims: ParticipantAuth,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantOut]:
    """
    Register the calling account for the conference with payment status 'pending'.

    Returns 409 if the account already has a registration. The confirmation email is sent after
    the response and its failure does not affect the registration.
    """
    participant = registration.register(db, claims.id, body)
    background_tasks.add_task(
        deliver_safely,
        send_registration_confirmation,
        participant.email,
        participant.full_name,
        participant.registration_type,
    )
    return success_response(
        "Participant registered successfully",
        ParticipantOut.model_validate(participant),
        status.HTTP_201_CREATED,
    )


@router.get("/me", response_model=ApiResponse[ParticipantOut])
def get_own_registration(
    claims: ParticipantAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantOut]:
    participant = registration.get_for_account(db, claims.id)
    return success_response("Participant profile retrieved", ParticipantOut.model_validate(participant))


@router.get("", response_model=ApiResponse[Page[ParticipantOut]])
def list_participants(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> ApiResponse[Page[ParticipantOut]]:
    """List registrations newest first. page and limit are clamped (page >= 1, 1 <= limit <= 100)."""
    page, limit, _ = clamp_pagination(page, limit)
    records, total = registration.list_all(db, page, limit)
    return success_response(
        "Participants retrieved",
        Page(
            data=[ParticipantOut.model_validate(p) for p in records],
            meta=PaginationMeta.build(total, page, limit),
        ),
    )


@router.get("/stats", response_model=ApiResponse[ParticipantStats])
def get_participant_stats(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantStats]:
    return success_response("Stats retrieved", dashboard.participant_stats(db))


@router.get("/{participant_id}", response_model=ApiResponse[ParticipantOut])
def get_participant(
    participant_id: int,
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantOut]:
    participant = registration.get(db, participant_id)
    return success_response("Participant retrieved", ParticipantOut.model_validate(participant))


@router.put("/{participant_id}", response_model=ApiResponse[ParticipantOut])
def update_participant(
    participant_id: int,
    body: ParticipantUpdate,
    _staff: StaffEditor,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantOut]:
    participant = registration.update_details(db, participant_id, body)
    return success_response("Participant updated successfully", ParticipantOut.model_validate(participant))


@router.patch("/{participant_id}/payment", response_model=ApiResponse[ParticipantOut])
def update_payment_status(
    participant_id: int,
    body: PaymentUpdateRequest,
    _staff: StaffEditor,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ParticipantOut]:
    """Record a manually verified payment outcome. Disallowed transitions return 409."""
    participant = registration.update_payment(
        db,
        participant_id,
        body.payment_status,
        method=body.payment_method,
        transaction_id=body.transaction_id,
    )
    return success_response(
        "Payment status updated successfully", ParticipantOut.model_validate(participant)
    )


@router.delete("/{participant_id}", response_model=ApiResponse[None])
def delete_participant(
    participant_id: int,
    _staff: StaffEditor,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[None]:
    """Delete an unpaid or cancelled registration. Paid registrations return 409."""
    registration.delete(db, participant_id)
    return success_response("Participant deleted successfully", None)
