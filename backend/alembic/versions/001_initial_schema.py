"""Initial schema: users, owner profiles, jobs, applications, profile sections.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", UUID(as_uuid=True), primary_key=True)


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), nullable=nullable,
        server_default=None if nullable else sa.func.now(),
    )


def _owner(table: str, column: str = "job_seeker_id") -> sa.Column:
    return sa.Column(
        column, UUID(as_uuid=True),
        sa.ForeignKey(f"{table}.id", ondelete="CASCADE"), nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("user_type", sa.String(20), nullable=True),
        sa.Column("avatar_url", sa.String(2048), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "job_seekers",
        _id(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("profession", sa.String(100), nullable=False),
        sa.Column("experience", sa.String(20), nullable=True),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("availability", sa.String(20), nullable=True),
        sa.Column("expected_salary", sa.Float, nullable=True),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_job_seekers_user_id", "job_seekers", ["user_id"])

    op.create_table(
        "employers",
        _id(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("facility_name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("website", sa.String(200), nullable=True),
        sa.Column("facility_type", sa.String(100), nullable=False),
        sa.Column("contact_person", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("total_employees", sa.String(50), nullable=True),
        sa.Column("years_in_operation", sa.String(50), nullable=True),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_employers_user_id", "employers", ["user_id"])

    op.create_table(
        "jobs",
        _id(),
        _owner("employers", "employer_id"),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("employment_type", sa.String(20), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("experience", sa.String(20), nullable=False),
        sa.Column("salary_min", sa.Float, nullable=True),
        sa.Column("salary_max", sa.Float, nullable=True),
        sa.Column("salary_display", sa.String(100), nullable=True),
        sa.Column("facility_type", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("is_urgent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("rank", sa.Integer, nullable=False, server_default="0"),
        sa.Column("spend_limit", sa.Float, nullable=True),
        sa.Column("applicants_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("views_count", sa.Integer, nullable=False, server_default="0"),
        _timestamp("posted_date"),
        _timestamp("expiry_date", nullable=True),
        _timestamp("deadline", nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_jobs_employer_id", "jobs", ["employer_id"])
    op.create_index("ix_jobs_category", "jobs", ["category"])
    op.create_index("ix_jobs_status", "jobs", ["status"])

    for table, column, length in (
        ("job_requirements", "requirement", 500),
        ("job_benefits", "benefit", 500),
        ("job_tags", "tag", 50),
    ):
        op.create_table(
            table,
            _id(),
            _owner("jobs", "job_id"),
            sa.Column(column, sa.String(length), nullable=False),
            _timestamp("created_at"),
        )
        op.create_index(f"ix_{table}_job_id", table, ["job_id"])

    op.create_table(
        "applications",
        _id(),
        _owner("jobs", "job_id"),
        _owner("job_seekers"),
        sa.Column("status", sa.String(30), nullable=False, server_default="applied"),
        sa.Column("cover_letter", sa.Text, nullable=True),
        sa.Column("resume_url", sa.String(2048), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        _timestamp("applied_date"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("job_id", "job_seeker_id", name="uq_applications_job_seeker"),
    )
    op.create_index("ix_applications_job_seeker_id", "applications", ["job_seeker_id"])

    op.create_table(
        "job_seeker_education",
        _id(),
        _owner("job_seekers"),
        sa.Column("degree", sa.String(200), nullable=False),
        sa.Column("school", sa.String(200), nullable=False),
        sa.Column("year", sa.String(20), nullable=False),
        sa.Column("honors", sa.String(200), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "job_seeker_work_history",
        _id(),
        _owner("job_seekers"),
        sa.Column("position", sa.String(200), nullable=False),
        sa.Column("facility", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date, nullable=True),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("duration", sa.String(100), nullable=False, server_default=""),
        sa.Column("is_current", sa.Boolean, nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
    )

    op.create_table(
        "job_seeker_certifications",
        _id(),
        _owner("job_seekers"),
        sa.Column("certification", sa.String(200), nullable=False),
        sa.Column("issuing_organization", sa.String(200), nullable=True),
        sa.Column("issue_date", sa.Date, nullable=True),
        sa.Column("expiry_date", sa.Date, nullable=True),
        sa.Column("credential_id", sa.String(100), nullable=True),
        _timestamp("created_at"),
    )

    for table in ("job_seeker_education", "job_seeker_work_history", "job_seeker_certifications"):
        op.create_index(f"ix_{table}_job_seeker_id", table, ["job_seeker_id"])

    op.create_table(
        "saved_jobs",
        _id(),
        _owner("job_seekers"),
        _owner("jobs", "job_id"),
        _timestamp("saved_date"),
        sa.UniqueConstraint("job_seeker_id", "job_id", name="uq_saved_jobs_seeker_job"),
    )
    op.create_index("ix_saved_jobs_job_seeker_id", "saved_jobs", ["job_seeker_id"])

    op.create_table(
        "profile_documents",
        _id(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        _owner("job_seekers"),
        sa.Column("document_type", sa.String(30), nullable=False),
        sa.Column("document_name", sa.String(255), nullable=False),
        sa.Column("file_url", sa.String(2048), nullable=False),
        sa.Column("file_size", sa.Integer, nullable=True),
        sa.Column("mime_type", sa.String(100), nullable=True),
        _timestamp("uploaded_at"),
        _timestamp("expires_at", nullable=True),
        sa.Column("is_verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text, nullable=True),
    )
    op.create_index("ix_profile_documents_user_id", "profile_documents", ["user_id"])

    op.create_table(
        "profile_views",
        _id(),
        _owner("job_seekers"),
        sa.Column("viewer_id", UUID(as_uuid=True), nullable=True),
        _timestamp("viewed_at"),
    )
    op.create_index("ix_profile_views_job_seeker_id", "profile_views", ["job_seeker_id"])


def downgrade() -> None:
    for table in (
        "profile_views", "profile_documents", "saved_jobs",
        "job_seeker_certifications", "job_seeker_work_history", "job_seeker_education",
        "applications", "job_tags", "job_benefits", "job_requirements",
        "jobs", "employers", "job_seekers", "users",
    ):
        op.drop_table(table)
