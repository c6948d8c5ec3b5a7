"""JWT issuance and verification for the two signing domains (participant, staff)."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Protocol

import jwt
from pydantic import ValidationError as PydanticValidationError

from conference.core.config import Settings, get_settings
from conference.core.errors import AuthenticationFailure
from conference.schemas.auth import (
    PARTICIPANT_ROLES,
    STAFF_ROLES,
    Claims,
    ParticipantClaims,
    StaffClaims,
)


class TokenDomain(str, Enum):
    """Signing domain; each has its own secret, lifetime, audience and role set."""

    PARTICIPANT = "participant"
    STAFF = "staff"


class TokenIdentity(Protocol):
    """Anything carrying the fields bound into a token (ORM accounts satisfy this)."""

    id: Any
    email: Any
    role: Any


@dataclass(frozen=True)
class DomainPolicy:
    secret: str
    expire_minutes: int
    roles: frozenset[str]
    claims_model: type[ParticipantClaims] | type[StaffClaims]


REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp", "aud"]


def domain_policy(domain: TokenDomain, settings: Settings | None = None) -> DomainPolicy:
    """Return secret material and policy for a signing domain."""
    settings = settings or get_settings()
    if domain is TokenDomain.STAFF:
        return DomainPolicy(
            secret=settings.JWT_ADMIN_SECRET.get_secret_value(),
            expire_minutes=settings.JWT_ADMIN_EXPIRE_MINUTES,
            roles=STAFF_ROLES,
            claims_model=StaffClaims,
        )
    return DomainPolicy(
        secret=settings.JWT_SECRET.get_secret_value(),
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
        roles=PARTICIPANT_ROLES,
        claims_model=ParticipantClaims,
    )


def issue_token(
    identity: TokenIdentity,
    domain: TokenDomain,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """
    Create a JWT binding {id, email, role} to one signing domain.

    Raises ValueError if the identity's role does not belong to the domain.
    """
    settings = settings or get_settings()
    policy = domain_policy(domain, settings)
    if identity.role not in policy.roles:
        raise ValueError(f"role {identity.role!r} cannot be issued in the {domain.value} domain")
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(identity.id),
        "email": identity.email,
        "role": identity.role,
        "aud": domain.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=policy.expire_minutes),
    }
    return jwt.encode(payload, policy.secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(
    token: str,
    domain: TokenDomain,
    *,
    settings: Settings | None = None,
) -> Claims:
    """
    Decode and validate a JWT under the given domain; return its typed claims.

    Raises AuthenticationFailure on bad signature, wrong domain, expiry,
    malformed structure or a role outside the domain's role set.
    """
    settings = settings or get_settings()
    policy = domain_policy(domain, settings)
    try:
        payload = jwt.decode(
            token,
            policy.secret,
            algorithms=[settings.JWT_ALGORITHM],
            audience=domain.value,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as exc:
        raise AuthenticationFailure() from exc
    try:
        return policy.claims_model(
            id=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )
    except (PydanticValidationError, KeyError) as exc:
        raise AuthenticationFailure("Invalid token payload") from exc


def verify_participant_token(token: str, *, settings: Settings | None = None) -> ParticipantClaims:
    claims = verify_token(token, TokenDomain.PARTICIPANT, settings=settings)
    if not isinstance(claims, ParticipantClaims):
        raise AuthenticationFailure()
    return claims


def verify_staff_token(token: str, *, settings: Settings | None = None) -> StaffClaims:
    claims = verify_token(token, TokenDomain.STAFF, settings=settings)
    if not isinstance(claims, StaffClaims):
        raise AuthenticationFailure()
    return claims


def authorize(claims: Claims, allowed_roles: frozenset[str] | set[str]) -> bool:
    """Return True only if the claims' role is in allowed_roles. No I/O."""
    return claims.role in allowed_roles
