"""Add participants (one per account, enforced by unique index) and reviewers tables.

Revision ID: 20261019100000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019100000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("affiliation", sa.String(length=255), nullable=True),
        sa.Column("registration_type", sa.String(length=32), nullable=False),
        sa.Column("paper_title", sa.String(length=500), nullable=True),
        sa.Column("payment_status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("payment_method", sa.String(length=32), nullable=True),
        sa.Column("transaction_id", sa.String(length=255), nullable=True),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("arrival_date", sa.Date(), nullable=True),
        sa.Column("departure_date", sa.Date(), nullable=True),
        sa.Column("dietary_requirements", sa.Text(), nullable=True),
        sa.Column("special_needs", sa.Text(), nullable=True),
        sa.Column("certificate_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "registration_type IN ('onsite-paper', 'online-paper', 'attendance')",
            name="ck_participants_registration_type",
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'completed', 'cancelled')",
            name="ck_participants_payment_status",
        ),
    )
    op.create_index(op.f("ix_participants_user_id"), "participants", ["user_id"], unique=True)
    op.create_index(op.f("ix_participants_country"), "participants", ["country"], unique=False)
    op.create_index(
        op.f("ix_participants_registration_type"), "participants", ["registration_type"], unique=False
    )
    op.create_index(
        op.f("ix_participants_payment_status"), "participants", ["payment_status"], unique=False
    )

    op.create_table(
        "reviewers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("affiliation", sa.String(length=255), nullable=False),
        sa.Column("expertise", sa.Text(), nullable=False, server_default=""),
        sa.Column("experience", sa.Integer(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejected_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_reviewers_email"), "reviewers", ["email"], unique=False)
    op.create_index(op.f("ix_reviewers_status"), "reviewers", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_reviewers_status"), table_name="reviewers")
    op.drop_index(op.f("ix_reviewers_email"), table_name="reviewers")
    op.drop_table("reviewers")
    op.drop_index(op.f("ix_participants_payment_status"), table_name="participants")
    op.drop_index(op.f("ix_participants_registration_type"), table_name="participants")
    op.drop_index(op.f("ix_participants_country"), table_name="participants")
    op.drop_index(op.f("ix_participants_user_id"), table_name="participants")
    op.drop_table("participants")
