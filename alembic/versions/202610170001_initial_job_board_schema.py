"""Initial job board schema

Revision ID: 202610170001
Revises:
Create Date: 2026-10-17 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "202610170001"
down_revision = None
branch_labels = None
depends_on = None

account_role_enum = sa.Enum("admin", "alumni", "employer", name="account_role")
verification_status_enum = sa.Enum("pending", "approved", "rejected", name="verification_status")
account_type_enum = sa.Enum("alumni", "employer", name="account_type")
application_status_enum = sa.Enum("submitted", "accepted", "rejected", name="application_status")


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=128), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"])

    # Append-only; the newest row per account is the effective role
    op.create_table(
        "role_assignments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "account_id",
            sa.String(length=36),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("role", account_role_enum, nullable=False),
        sa.Column("assigned_by", sa.String(length=36), nullable=True),
        _timestamp("assigned_at"),
    )
    op.create_index("ix_role_assignments_account_id", "role_assignments", ["account_id"])

    op.create_table(
        "verification_profiles",
        sa.Column(
            "account_id",
            sa.String(length=36),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("status", verification_status_enum, nullable=False, server_default="pending"),
        sa.Column("id_number", sa.String(length=64), nullable=False),
        sa.Column("account_type", account_type_enum, nullable=False),
        sa.Column("reviewed_by", sa.String(length=36), nullable=True),
        _timestamp("reviewed_at", nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "job_postings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("owner_account_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_job_postings_owner_account_id", "job_postings", ["owner_account_id"])

    op.create_table(
        "job_applications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "job_id",
            sa.String(length=36),
            sa.ForeignKey("job_postings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("applicant_account_id", sa.String(length=36), nullable=False),
        sa.Column("status", application_status_enum, nullable=False, server_default="submitted"),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("resume_reference", sa.String(length=512), nullable=True),
        sa.Column("decided_by", sa.String(length=36), nullable=True),
        _timestamp("decided_at", nullable=True),
        _timestamp("created_at"),
        sa.UniqueConstraint(
            "job_id", "applicant_account_id", name="uq_job_application_applicant"
        ),
    )
    op.create_index("ix_job_applications_job_id", "job_applications", ["job_id"])
    op.create_index(
        "ix_job_applications_applicant_account_id",
        "job_applications",
        ["applicant_account_id"],
    )


def downgrade() -> None:
    op.drop_table("job_applications")
    op.drop_table("job_postings")
    op.drop_table("verification_profiles")
    op.drop_table("role_assignments")
    op.drop_table("accounts")

    bind = op.get_bind()
    for enum in (
        application_status_enum,
        account_type_enum,
        verification_status_enum,
        account_role_enum,
    ):
        enum.drop(bind, checkfirst=True)
