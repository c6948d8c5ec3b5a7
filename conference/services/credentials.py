"""Credential store: participant and staff accounts, password checks and staff provisioning."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from conference.core.errors import DuplicateAccount, NotFound, ValidationError
from conference.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    burn_password_check,
    hash_password,
    verify_password,
)
from conference.models import ParticipantAccount, StaffAccount
from conference.schemas.auth import PARTICIPANT_ROLES, STAFF_ROLES, normalize_email
from conference.services.pagination import clamp_pagination

logger = logging.getLogger(__name__)


def _normalized(email: str) -> str:
    try:
        return normalize_email(email)
    except ValueError as exc:
        raise ValidationError("Invalid email address.") from exc


def _validate_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )


def _commit_new(db: Session, obj: ParticipantAccount | StaffAccount) -> None:
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateAccount() from exc
    db.refresh(obj)


def find_account_by_email(db: Session, email: str) -> ParticipantAccount | None:
    return (
        db.query(ParticipantAccount)
        .filter(ParticipantAccount.email == _normalized(email))
        .first()
    )


def register_account(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: str | None = None,
    country: str | None = None,
    affiliation: str | None = None,
) -> ParticipantAccount:
    """Create a participant account with role 'participant'. Raises DuplicateAccount if the email is taken."""
    email = _normalized(email)
    _validate_password(password)
    if find_account_by_email(db, email) is not None:
        raise DuplicateAccount()
    account = ParticipantAccount(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        phone=phone,
        country=country,
        affiliation=affiliation,
        role="participant",
    )
    _commit_new(db, account)
    logger.info("Participant account created: id=%s", account.id)
    return account


def authenticate_participant(db: Session, email: str, password: str) -> ParticipantAccount | None:
    """
    Return the account when email and password match, else None.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    try:
        account = find_account_by_email(db, email)
    except ValidationError:
        account = None
    if account is None:
        burn_password_check(password)
        return None
    if not verify_password(password, account.password_hash):
        return None
    return account


def get_account(db: Session, account_id: int) -> ParticipantAccount:
    account = db.get(ParticipantAccount, account_id)
    if account is None:
        raise NotFound("Account not found")
    return account


def change_password(
    db: Session,
    account: ParticipantAccount,
    current_password: str,
    new_password: str,
) -> None:
    """Replace the account's password after checking the current one."""
    if not verify_password(current_password, account.password_hash):
        raise ValidationError("Current password is incorrect.")
    _validate_password(new_password)
    account.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed: account_id=%s", account.id)


def set_account_role(db: Session, account_id: int, role: str) -> ParticipantAccount:
    """Change a participant account's role. Takes effect in tokens issued after the change."""
    if role not in PARTICIPANT_ROLES:
        raise ValidationError(f"role must be one of {sorted(PARTICIPANT_ROLES)}")
    account = get_account(db, account_id)
    previous = account.role
    account.role = role
    db.commit()
    db.refresh(account)
    logger.info("Account role changed: account_id=%s %s -> %s", account.id, previous, role)
    return account


def create_staff(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = "admin",
) -> StaffAccount:
    """Provision an active staff account. Raises DuplicateAccount if the email is taken."""
    email = _normalized(email)
    _validate_password(password)
    if role not in STAFF_ROLES:
        raise ValidationError(f"role must be one of {sorted(STAFF_ROLES)}")
    if db.query(StaffAccount).filter(StaffAccount.email == email).first() is not None:
        raise DuplicateAccount("Admin with this email already exists")
    staff = StaffAccount(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        role=role,
        is_active=True,
    )
    _commit_new(db, staff)
    logger.info("Staff account created: id=%s role=%s", staff.id, role)
    return staff


def authenticate_staff(
    db: Session,
    email: str,
    password: str,
    now: datetime | None = None,
) -> StaffAccount | None:
    """Return the active staff account when credentials match and stamp last_login_at; else None."""
    try:
        email = _normalized(email)
    except ValidationError:
        burn_password_check(password)
        return None
    staff = (
        db.query(StaffAccount)
        .filter(StaffAccount.email == email, StaffAccount.is_active.is_(True))
        .first()
    )
    if staff is None:
        burn_password_check(password)
        return None
    if not verify_password(password, staff.password_hash):
        return None
    staff.last_login_at = now or datetime.now(UTC)
    db.commit()
    db.refresh(staff)
    return staff


def get_staff(db: Session, staff_id: int) -> StaffAccount:
    staff = db.get(StaffAccount, staff_id)
    if staff is None:
        raise NotFound("Admin not found")
    return staff


def list_staff(db: Session, page: int, page_size: int) -> tuple[list[StaffAccount], int]:
    page, page_size, offset = clamp_pagination(page, page_size)
    query = db.query(StaffAccount)
    total = query.count()
    records = (
        query.order_by(StaffAccount.created_at.desc(), StaffAccount.id.desc())
        .offset(offset)
        .limit(page_size)
        .all()
    )
    return records, total


def deactivate_staff(db: Session, staff_id: int) -> StaffAccount:
    """Mark a staff account inactive. Already-issued tokens stay valid until they expire."""
    staff = get_staff(db, staff_id)
    staff.is_active = False
    db.commit()
    db.refresh(staff)
    logger.info("Staff account deactivated: id=%s", staff.id)
    return staff


def set_staff_role(db: Session, staff_id: int, role: str) -> StaffAccount:
    """Change a staff account's role. Takes effect in tokens issued after the change."""
    if role not in STAFF_ROLES:
        raise ValidationError(f"role must be one of {sorted(STAFF_ROLES)}")
    staff = get_staff(db, staff_id)
    previous = staff.role
    staff.role = role
    db.commit()
    db.refresh(staff)
    logger.info("Staff role changed: id=%s %s -> %s", staff.id, previous, role)
    return staff
