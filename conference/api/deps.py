"""
Authorization dependencies: bearer extraction, per-domain token verification and role checks.

A route picks its signing domain by depending on get_participant_claims or get_staff_claims; a token
from the other domain is rejected even when its role string would match. Role checks run only after
verification succeeds, and nothing in the route body executes on failure.
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from conference.core.errors import AuthenticationFailure, AuthorizationFailure
from conference.core.tokens import authorize, verify_participant_token, verify_staff_token
from conference.schemas.auth import (
    PARTICIPANT_ROLES,
    STAFF_EDITOR_ROLES,
    STAFF_ROLES,
    ParticipantClaims,
    StaffClaims,
)

security = HTTPBearer(auto_error=False)


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailure("Not authenticated")
    return credentials.credentials


def get_participant_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> ParticipantClaims:
    """Dependency: require a valid participant-domain Bearer token. Raises 401 otherwise."""
    return verify_participant_token(_bearer_token(credentials))


def get_staff_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> StaffClaims:
    """Dependency: require a valid staff-domain Bearer token. Raises 401 otherwise."""
    return verify_staff_token(_bearer_token(credentials))


def require_staff_roles(*roles: str) -> Callable[[StaffClaims], StaffClaims]:
    """Build a dependency that requires a staff token whose role is in roles (403 otherwise)."""
    allowed = frozenset(roles)
    unknown = allowed - STAFF_ROLES
    if not allowed or unknown:
        raise ValueError(f"invalid staff roles: {sorted(unknown) or 'none given'}")

    def dependency(claims: Annotated[StaffClaims, Depends(get_staff_claims)]) -> StaffClaims:
        if not authorize(claims, allowed):
            raise AuthorizationFailure()
        return claims

    return dependency


def require_participant_roles(*roles: str) -> Callable[[ParticipantClaims], ParticipantClaims]:
    """Build a dependency that requires a participant token whose role is in roles (403 otherwise)."""
    allowed = frozenset(roles)
    unknown = allowed - PARTICIPANT_ROLES
    if not allowed or unknown:
        raise ValueError(f"invalid participant roles: {sorted(unknown) or 'none given'}")

    def dependency(
        claims: Annotated[ParticipantClaims, Depends(get_participant_claims)],
    ) -> ParticipantClaims:
        if not authorize(claims, allowed):
            raise AuthorizationFailure()
        return claims

    return dependency


ParticipantAuth = Annotated[ParticipantClaims, Depends(get_participant_claims)]
StaffAuth = Annotated[StaffClaims, Depends(get_staff_claims)]
StaffEditor = Annotated[StaffClaims, Depends(require_staff_roles(*STAFF_EDITOR_ROLES))]
SuperAdmin = Annotated[StaffClaims, Depends(require_staff_roles("super-admin"))]
CommitteeMember = Annotated[
    ParticipantClaims, Depends(require_participant_roles("committee", "reviewer"))
]
