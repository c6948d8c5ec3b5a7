"""Pydantic request/response schemas."""

from conference.schemas.auth import (
    PARTICIPANT_ROLES,
    STAFF_ROLES,
    Claims,
    ParticipantClaims,
    StaffClaims,
)
from conference.schemas.envelope import ApiResponse, Page, PaginationMeta
from conference.schemas.health import HealthResponse
from conference.schemas.participant import (
    PAYMENT_STATUSES,
    REGISTRATION_TYPES,
    ParticipantCreate,
    ParticipantOut,
)

__all__ = [
    "ApiResponse",
    "Claims",
    "HealthResponse",
    "PARTICIPANT_ROLES",
    "PAYMENT_STATUSES",
    "Page",
    "PaginationMeta",
    "ParticipantClaims",
    "ParticipantCreate",
    "ParticipantOut",
    "REGISTRATION_TYPES",
    "STAFF_ROLES",
    "StaffClaims",
]
