"""ORM model for conference registrations and their payment status."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)

from conference.models.base import Base


class Participant(Base):
    """
    One registration per participant account.

    The unique index on user_id is the authoritative one-registration-per-account check.
    payment_status: 'pending', 'completed' or 'cancelled'.
    """

    __tablename__ = "participants"
    __table_args__ = (
        CheckConstraint(
            "registration_type IN ('onsite-paper', 'online-paper', 'attendance')",
            name="ck_participants_registration_type",
        ),
        CheckConstraint(
            "payment_status IN ('pending', 'completed', 'cancelled')",
            name="ck_participants_payment_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
        index=True,
    )
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)
    country = Column(String(120), nullable=False, index=True)
    affiliation = Column(String(255), nullable=True)
    registration_type = Column(String(32), nullable=False, index=True)
    paper_title = Column(String(500), nullable=True)
    payment_status = Column(String(32), nullable=False, default="pending", index=True)
    payment_method = Column(String(32), nullable=True)
    transaction_id = Column(String(255), nullable=True)
    registration_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    arrival_date = Column(Date, nullable=True)
    departure_date = Column(Date, nullable=True)
    dietary_requirements = Column(Text, nullable=True)
    special_needs = Column(Text, nullable=True)
    certificate_generated = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
