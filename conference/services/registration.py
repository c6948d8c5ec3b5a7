"""
Participant registration lifecycle: one registration per account and the payment-status state machine.

Payment status graph (see PAYMENT_TRANSITIONS):

    pending -> completed
    pending -> cancelled

completed and cancelled are terminal unless PAYMENT_ALLOW_CORRECTIONS is enabled, which additionally
permits moving either back to pending. Same-status updates are allowed so staff can amend the payment
method or transaction reference. A completed registration can never be deleted.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from conference.core.config import get_settings
from conference.core.errors import (
    Conflict,
    DuplicateRegistration,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from conference.models import Participant, ParticipantAccount
from conference.schemas.participant import (
    PAYMENT_METHODS,
    PAYMENT_STATUSES,
    REGISTRATION_TYPES,
    ParticipantCreate,
    ParticipantUpdate,
)
from conference.services.pagination import clamp_pagination

logger = logging.getLogger(__name__)

# (current, requested) -> allowed without corrections enabled.
PAYMENT_TRANSITIONS: dict[tuple[str, str], bool] = {
    ("pending", "pending"): True,
    ("pending", "completed"): True,
    ("pending", "cancelled"): True,
    ("completed", "completed"): True,
    ("completed", "pending"): False,
    ("completed", "cancelled"): False,
    ("cancelled", "cancelled"): True,
    ("cancelled", "pending"): False,
    ("cancelled", "completed"): False,
}

# Edges that PAYMENT_ALLOW_CORRECTIONS unlocks (clerical fixes).
CORRECTION_TRANSITIONS: frozenset[tuple[str, str]] = frozenset(
    {("completed", "pending"), ("cancelled", "pending")}
)

# Columns that must keep a value on administrative edit.
REQUIRED_DETAIL_FIELDS = frozenset({"full_name", "phone", "country", "certificate_generated"})


def is_transition_allowed(current: str, requested: str, allow_corrections: bool = False) -> bool:
    if PAYMENT_TRANSITIONS.get((current, requested), False):
        return True
    return allow_corrections and (current, requested) in CORRECTION_TRANSITIONS


def _locked(db: Session, participant_id: int) -> Participant:
    """Load a participant row with a row lock (no-op on backends without FOR UPDATE)."""
    participant = (
        db.query(Participant)
        .filter(Participant.id == participant_id)
        .with_for_update()
        .first()
    )
    if participant is None:
        raise NotFound("Participant not found")
    return participant


def register(db: Session, account_id: int, details: ParticipantCreate) -> Participant:
    """
    Create the account's registration with payment_status 'pending'.

    Raises ValidationError for an unknown registration type, NotFound if the account does not exist,
    and DuplicateRegistration if the account already has a registration. The unique index on
    participants.user_id decides concurrent duplicates.
    """
    if details.registration_type not in REGISTRATION_TYPES:
        raise ValidationError(
            f"registration_type must be one of {sorted(REGISTRATION_TYPES)}",
            error=f"got {details.registration_type!r}",
        )
    account = db.get(ParticipantAccount, account_id)
    if account is None:
        raise NotFound("Account not found")
    if db.query(Participant.id).filter(Participant.user_id == account.id).first() is not None:
        raise DuplicateRegistration()

    full_name = details.resolved_full_name() or account.full_name
    participant = Participant(
        user_id=account.id,
        full_name=full_name,
        email=account.email,
        phone=details.phone.strip(),
        country=details.country.strip(),
        affiliation=details.affiliation or details.institution or account.affiliation,
        registration_type=details.registration_type,
        paper_title=details.paper_title,
        payment_status="pending",
        arrival_date=details.arrival_date,
        departure_date=details.departure_date,
        dietary_requirements=details.dietary_requirements,
        special_needs=details.special_needs,
        certificate_generated=False,
    )
    db.add(participant)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRegistration() from exc
    db.refresh(participant)
    logger.info(
        "Participant registered: id=%s account_id=%s type=%s",
        participant.id,
        account.id,
        participant.registration_type,
    )
    return participant


def get(db: Session, participant_id: int) -> Participant:
    participant = db.get(Participant, participant_id)
    if participant is None:
        raise NotFound("Participant not found")
    return participant


def get_for_account(db: Session, account_id: int) -> Participant:
    participant = db.query(Participant).filter(Participant.user_id == account_id).first()
    if participant is None:
        raise NotFound("Participant not found")
    return participant


def update_details(db: Session, participant_id: int, changes: ParticipantUpdate) -> Participant:
    """Apply an administrative edit. registration_type and payment_status are not editable here."""
    values = changes.model_dump(exclude_unset=True)
    for field in REQUIRED_DETAIL_FIELDS:
        if field in values and values[field] is None:
            raise ValidationError(f"{field} cannot be cleared")
    participant = _locked(db, participant_id)
    for field, value in values.items():
        setattr(participant, field, value)
    if (
        participant.arrival_date
        and participant.departure_date
        and participant.departure_date < participant.arrival_date
    ):
        db.rollback()
        raise ValidationError("departure_date must not be before arrival_date")
    db.commit()
    db.refresh(participant)
    logger.info("Participant updated: id=%s fields=%s", participant.id, sorted(values))
    return participant


def update_payment(
    db: Session,
    participant_id: int,
    new_status: str,
    method: str | None = None,
    transaction_id: str | None = None,
    *,
    allow_corrections: bool | None = None,
) -> Participant:
    """
    Move a registration's payment status along the transition table.

    Raises ValidationError for unknown status or method, NotFound for a missing record and
    InvalidTransition when the edge is not allowed.
    """
    if new_status not in PAYMENT_STATUSES:
        raise ValidationError(f"payment_status must be one of {sorted(PAYMENT_STATUSES)}")
    if method is not None and method not in PAYMENT_METHODS:
        raise ValidationError(f"payment_method must be one of {sorted(PAYMENT_METHODS)}")
    if allow_corrections is None:
        allow_corrections = get_settings().PAYMENT_ALLOW_CORRECTIONS

    participant = _locked(db, participant_id)
    current = participant.payment_status
    if not is_transition_allowed(current, new_status, allow_corrections):
        db.rollback()
        raise InvalidTransition(f"Cannot change payment status from {current} to {new_status}")

    participant.payment_status = new_status
    if method is not None:
        participant.payment_method = method
    if transaction_id is not None:
        participant.transaction_id = transaction_id
    db.commit()
    db.refresh(participant)
    logger.info(
        "Payment status changed: participant_id=%s %s -> %s",
        participant.id,
        current,
        new_status,
    )
    return participant


def delete(db: Session, participant_id: int) -> None:
    """Delete a registration. Raises Conflict if its payment is completed."""
    participant = _locked(db, participant_id)
    if participant.payment_status == "completed":
        db.rollback()
        raise Conflict("Cannot delete paid participant", error="Payment has been completed")
    db.delete(participant)
    db.commit()
    logger.info("Participant deleted: id=%s", participant_id)


def list_all(db: Session, page: int, page_size: int) -> tuple[list[Participant], int]:
    """Return one page of registrations (newest first) and the total count."""
    page, page_size, offset = clamp_pagination(page, page_size)
    query = db.query(Participant)
    total = query.count()
    records = (
        query.order_by(Participant.created_at.desc(), Participant.id.desc())
        .offset(offset)
        .limit(page_size)
        .all()
    )
    return records, total
