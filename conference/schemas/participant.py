"""Pydantic schemas for participant registrations and payment updates."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Closed set of registration types; fixed once a registration is created.
RegistrationType = Literal["onsite-paper", "online-paper", "attendance"]

REGISTRATION_TYPES: frozenset[str] = frozenset({"onsite-paper", "online-paper", "attendance"})

PaymentStatus = Literal["pending", "completed", "cancelled"]

PAYMENT_STATUSES: frozenset[str] = frozenset({"pending", "completed", "cancelled"})

PaymentMethod = Literal["bank-transfer", "credit-card"]

PAYMENT_METHODS: frozenset[str] = frozenset({"bank-transfer", "credit-card"})


class ParticipantCreate(BaseModel):
    """
    Registration form body.

    full_name may be given directly or assembled from first/middle/last name.
    registration_type is checked by the registration service, not here.
    """

    model_config = ConfigDict(extra="ignore")

    full_name: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=120)
    middle_name: str | None = Field(default=None, max_length=120)
    last_name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)
    phone: str = Field(..., min_length=3, max_length=40)
    country: str = Field(..., min_length=1, max_length=120)
    affiliation: str | None = Field(default=None, max_length=255)
    institution: str | None = Field(default=None, max_length=255)
    registration_type: str = Field(..., description="onsite-paper, online-paper or attendance")
    paper_title: str | None = Field(default=None, max_length=500)
    arrival_date: date | None = None
    departure_date: date | None = None
    dietary_requirements: str | None = Field(default=None, max_length=2000)
    special_needs: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def validate_travel_dates(self) -> "ParticipantCreate":
        if self.arrival_date and self.departure_date and self.departure_date < self.arrival_date:
            raise ValueError("departure_date must not be before arrival_date")
        return self

    def resolved_full_name(self) -> str:
        if self.full_name and self.full_name.strip():
            return self.full_name.strip()
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p.strip() for p in parts if p and p.strip())


class ParticipantUpdate(BaseModel):
    """Administrative edit. registration_type and payment_status are not editable here."""

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=3, max_length=40)
    country: str | None = Field(default=None, min_length=1, max_length=120)
    affiliation: str | None = Field(default=None, max_length=255)
    paper_title: str | None = Field(default=None, max_length=500)
    arrival_date: date | None = None
    departure_date: date | None = None
    dietary_requirements: str | None = Field(default=None, max_length=2000)
    special_needs: str | None = Field(default=None, max_length=2000)
    certificate_generated: bool | None = None
    notes: str | None = Field(default=None, max_length=5000)


class PaymentUpdateRequest(BaseModel):
    """Body for PATCH /registrations/{id}/payment."""

    payment_status: str = Field(..., description="pending, completed or cancelled")
    payment_method: str | None = Field(default=None, description="bank-transfer or credit-card")
    transaction_id: str | None = Field(default=None, max_length=255)


class ParticipantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    full_name: str
    email: str
    phone: str
    country: str
    affiliation: str | None = None
    registration_type: RegistrationType
    paper_title: str | None = None
    payment_status: PaymentStatus
    payment_method: PaymentMethod | None = None
    transaction_id: str | None = None
    registration_date: datetime | None = None
    arrival_date: date | None = None
    departure_date: date | None = None
    dietary_requirements: str | None = None
    special_needs: str | None = None
    certificate_generated: bool = False
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
