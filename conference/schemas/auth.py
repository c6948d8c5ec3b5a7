"""Request/response schemas for auth endpoints, role sets and typed token claims."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator

from conference.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN

# Roles for the participant signing domain.
ParticipantRole = Literal["participant", "reviewer", "speaker", "committee"]

PARTICIPANT_ROLES: frozenset[str] = frozenset({"participant", "reviewer", "speaker", "committee"})

# Roles for the staff signing domain.
StaffRole = Literal["admin", "super-admin", "moderator"]

STAFF_ROLES: frozenset[str] = frozenset({"admin", "super-admin", "moderator"})

# Staff roles allowed to change registrations and reviewer status.
STAFF_EDITOR_ROLES: frozenset[str] = frozenset({"admin", "super-admin"})


_email_adapter = TypeAdapter(EmailStr)


def lower_email(value: object) -> object:
    """Strip and lower-case an email before EmailStr validates it."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def normalize_email(value: str) -> str:
    """Strip, lower-case and validate an email address. Raises pydantic.ValidationError if invalid."""
    return _email_adapter.validate_python(lower_email(value))


class ParticipantClaims(BaseModel):
    """Claims of a verified participant-domain token."""

    model_config = ConfigDict(frozen=True)

    domain: Literal["participant"] = "participant"
    id: int
    email: str
    role: ParticipantRole
    issued_at: datetime
    expires_at: datetime


class StaffClaims(BaseModel):
    """Claims of a verified staff-domain token."""

    model_config = ConfigDict(frozen=True)

    domain: Literal["staff"] = "staff"
    id: int
    email: str
    role: StaffRole
    issued_at: datetime
    expires_at: datetime


Claims = ParticipantClaims | StaffClaims


class LoginRequest(BaseModel):
    """Credentials for login (participant or staff)."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def email_lowercase(cls, v: object) -> object:
        return lower_email(v)

    def __repr__(self) -> str:
        return f"LoginRequest(email={self.email}, password=***)"


class AccountRegisterRequest(BaseModel):
    """Body for creating a participant account."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=40)
    country: str | None = Field(default=None, max_length=120)
    affiliation: str | None = Field(default=None, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def email_lowercase(cls, v: object) -> object:
        return lower_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must be non-empty")
        return v.strip()


class StaffCreateRequest(BaseModel):
    """Body for provisioning a staff account (super-admin only)."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    role: StaffRole = "admin"

    @field_validator("email", mode="before")
    @classmethod
    def email_lowercase(cls, v: object) -> object:
        return lower_email(v)


class AccountOut(BaseModel):
    """Participant account as returned to callers (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    country: str | None = None
    affiliation: str | None = None
    role: ParticipantRole


class StaffOut(BaseModel):
    """Staff account as returned to callers (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    role: StaffRole
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    """JWT access token returned after successful participant login or registration."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: AccountOut


class StaffTokenResponse(BaseModel):
    """Staff-domain JWT returned after successful admin login."""

    access_token: str = Field(..., description="JWT access token (staff domain)")
    token_type: str = Field(default="bearer", description="Token type")
    admin: StaffOut


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class AccountRoleUpdate(BaseModel):
    """Body for changing a participant account's role (staff only)."""

    role: ParticipantRole


class StaffRoleUpdate(BaseModel):
    """Body for changing a staff account's role (super-admin only)."""

    role: StaffRole
