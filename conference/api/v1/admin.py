"""Staff-domain endpoints: admin login, profile, staff provisioning and participant role changes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from conference.api.deps import StaffAuth, StaffEditor, SuperAdmin
from conference.core.database import get_db
from conference.core.errors import AuthenticationFailure, Conflict
from conference.core.tokens import TokenDomain, issue_token
from conference.schemas.auth import (
    AccountOut,
    AccountRoleUpdate,
    LoginRequest,
    StaffCreateRequest,
    StaffOut,
    StaffRoleUpdate,
    StaffTokenResponse,
)
from conference.schemas.envelope import ApiResponse, Page, PaginationMeta, success_response
from conference.services import credentials
from conference.services.pagination import clamp_pagination

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=ApiResponse[StaffTokenResponse])
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[StaffTokenResponse]:
    """Authenticate an active staff account; returns a staff-domain JWT (shorter-lived)."""
    staff = credentials.authenticate_staff(db, body.email, body.password)
    if staff is None:
        logger.info("Staff login failed")
        raise AuthenticationFailure("Invalid email or password")
    token = issue_token(staff, TokenDomain.STAFF)
    logger.info("Staff login: staff_id=%s role=%s", staff.id, staff.role)
    return success_response(
        "Login successful",
        StaffTokenResponse(access_token=token, admin=StaffOut.model_validate(staff)),
    )


@router.get("/profile", response_model=ApiResponse[StaffOut])
def get_profile(
    claims: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[StaffOut]:
    staff = credentials.get_staff(db, claims.id)
    return success_response("Profile retrieved successfully", StaffOut.model_validate(staff))


@router.post("/logout", response_model=ApiResponse[None])
def logout(_claims: StaffAuth) -> ApiResponse[None]:
    """Advisory only: the server performs no token invalidation."""
    return success_response("Logout successful", None)


@router.post(
    "/staff",
    response_model=ApiResponse[StaffOut],
    status_code=status.HTTP_201_CREATED,
)
def create_staff(
    body: StaffCreateRequest,
    _admin: SuperAdmin,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[StaffOut]:
    staff = credentials.create_staff(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
    )
    return success_response(
        "Admin created successfully", StaffOut.model_validate(staff), status.HTTP_201_CREATED
    )


@router.get("/staff", response_model=ApiResponse[Page[StaffOut]])
def list_staff(
    _admin: StaffEditor,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> ApiResponse[Page[StaffOut]]:
    page, limit, _ = clamp_pagination(page, limit)
    records, total = credentials.list_staff(db, page, limit)
    return success_response(
        "Admins retrieved successfully",
        Page(
            data=[StaffOut.model_validate(s) for s in records],
            meta=PaginationMeta.build(total, page, limit),
        ),
    )


@router.post("/staff/{staff_id}/deactivate", response_model=ApiResponse[StaffOut])
def deactivate_staff(
    staff_id: int,
    admin: SuperAdmin,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[StaffOut]:
    if staff_id == admin.id:
        raise Conflict("Cannot deactivate your own account")
    staff = credentials.deactivate_staff(db, staff_id)
    return success_response("Admin deactivated", StaffOut.model_validate(staff))


@router.patch("/staff/{staff_id}/role", response_model=ApiResponse[StaffOut])
def set_staff_role(
    staff_id: int,
    body: StaffRoleUpdate,
    admin: SuperAdmin,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[StaffOut]:
    """Change a staff account's role; applies to tokens issued after the change."""
    if staff_id == admin.id:
        raise Conflict("Cannot change your own role")
    staff = credentials.set_staff_role(db, staff_id, body.role)
    return success_response("Admin role updated", StaffOut.model_validate(staff))


@router.patch("/accounts/{account_id}/role", response_model=ApiResponse[AccountOut])
def set_account_role(
    account_id: int,
    body: AccountRoleUpdate,
    _admin: StaffEditor,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[AccountOut]:
    """Change a participant account's role; applies to tokens issued after the change."""
    account = credentials.set_account_role(db, account_id, body.role)
    return success_response("Account role updated", AccountOut.model_validate(account))
