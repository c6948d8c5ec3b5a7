"""Participant-domain auth: account registration, login, profile and password change."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from conference.api.deps import ParticipantAuth
from conference.core.database import get_db
from conference.core.errors import AuthenticationFailure
from conference.core.tokens import TokenDomain, issue_token
from conference.schemas.auth import (
    AccountOut,
    AccountRegisterRequest,
    LoginRequest,
    PasswordChangeRequest,
    TokenResponse,
)
from conference.schemas.envelope import ApiResponse, success_response
from conference.services import credentials

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    response_model=ApiResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: AccountRegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[TokenResponse]:
    """Create a participant account and return a participant-domain token."""
    account = credentials.register_account(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        country=body.country,
        affiliation=body.affiliation,
    )
    token = issue_token(account, TokenDomain.PARTICIPANT)
    return success_response(
        "User registered successfully",
        TokenResponse(access_token=token, user=AccountOut.model_validate(account)),
        status.HTTP_201_CREATED,
    )


@router.post("/login", response_model=ApiResponse[TokenResponse])
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[TokenResponse]:
    """
    Authenticate with email and password; returns a participant-domain JWT.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    account = credentials.authenticate_participant(db, body.email, body.password)
    if account is None:
        logger.info("Participant login failed")
        raise AuthenticationFailure("Invalid email or password")
    token = issue_token(account, TokenDomain.PARTICIPANT)
    logger.info("Participant login: account_id=%s", account.id)
    return success_response(
        "Login successful",
        TokenResponse(access_token=token, user=AccountOut.model_validate(account)),
    )


@router.get("/profile", response_model=ApiResponse[AccountOut])
def get_profile(
    claims: ParticipantAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[AccountOut]:
    account = credentials.get_account(db, claims.id)
    return success_response("Profile retrieved", AccountOut.model_validate(account))


@router.post("/password", response_model=ApiResponse[None])
def change_password(
    body: PasswordChangeRequest,
    claims: ParticipantAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[None]:
    """Change the caller's password. Tokens issued before the change stay valid until they expire."""
    account = credentials.get_account(db, claims.id)
    credentials.change_password(db, account, body.current_password, body.new_password)
    return success_response("Password changed", None)


@router.post("/logout", response_model=ApiResponse[None])
def logout(_claims: ParticipantAuth) -> ApiResponse[None]:
    """Advisory only: the client discards its token; the server keeps no session to invalidate."""
    return success_response("Logout successful", None)
