"""Job Seeker Profile Sections ORM: education, work history, certifications.

Invariants:
    - Every row belongs to exactly one job_seekers.id and cascades with it
    - Per-profile caps (10 education, 10 work history, 20 certifications) are
      enforced by the services before insert, not by the schema

Design Decisions:
    - One module for the three section tables: identical ownership shape,
      read together for the public profile view
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _owner_column() -> Mapped[uuid.UUID]:
    return mapped_column(
        UUID(as_uuid=True),
        ForeignKey("job_seekers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )


class Education(Base):
    __tablename__ = "job_seeker_education"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    job_seeker_id: Mapped[uuid.UUID] = _owner_column()
    degree: Mapped[str] = mapped_column(String(200), nullable=False)
    school: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[str] = mapped_column(String(20), nullable=False)
    honors: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )


class WorkHistory(Base):
    __tablename__ = "job_seeker_work_history"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    job_seeker_id: Mapped[uuid.UUID] = _owner_column()
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    facility: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    duration: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )


class Certification(Base):
    __tablename__ = "job_seeker_certifications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    job_seeker_id: Mapped[uuid.UUID] = _owner_column()
    certification: Mapped[str] = mapped_column(String(200), nullable=False)
    issuing_organization: Mapped[str | None] = mapped_column(String(200), nullable=True)
    issue_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    credential_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
