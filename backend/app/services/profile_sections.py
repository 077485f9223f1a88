"""Profile Section Service: capped, owner-scoped lists hanging off a job-seeker profile.

Invariants:
    - Every operation resolves the caller's job_seekers.id first (404 without a profile)
    - create counts existing rows and refuses the (N+1)-th with a 400 DatabaseError,
      so the stored count never exceeds the cap
    - update/delete fetch the entry by id first: 404 when absent, 403 when it
      belongs to another seeker, and only then mutate
    - Listing is Tier 2: a failing read degrades to []

Design Decisions:
    - One parameterized service object per table instead of three copy-pasted
      modules: the tables differ only in model, order column, cap and wording
    - Non-owners get 403 on mutations, same as job postings
      (ADR: wrong-owner policy per resource kind)
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.core.domain_types import (
    MAX_CERTIFICATION_ENTRIES, MAX_EDUCATION_ENTRIES, MAX_EXPERIENCE_ENTRIES,
)
from app.core.durations import calculate_duration
from app.core.errors import DatabaseError, ForbiddenError, NotFoundError
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.profile_sections import Certification, Education, WorkHistory
from app.schemas.common import RequestModel
from app.services.common import mapped_errors, rows
from app.services.ownership import resolve_job_seeker_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileSection:
    model: type
    order_column: str
    max_entries: int
    limit_message: str
    missing_message: str
    label: str

    def prepare(self, values: dict[str, Any]) -> dict[str, Any]:
        return values

    async def list_for_owner(self, store: RowStore, job_seeker_id: UUID) -> list[dict[str, Any]]:
        column = getattr(self.model, self.order_column)
        try:
            found = await store.fetch_all(
                select(self.model).where(self.model.job_seeker_id == job_seeker_id)
                .order_by(column.desc()),
            )
        except PersistenceError as exc:
            logger.warning(f"{self.label} unavailable: {exc.message}")
            return []
        return rows(found)

    async def list_mine(self, store: RowStore, subject_id: str) -> list[dict[str, Any]]:
        job_seeker_id = await resolve_job_seeker_id(store, subject_id)
        return await self.list_for_owner(store, job_seeker_id)

    async def create(
        self, store: RowStore, subject_id: str, body: RequestModel,
    ) -> dict[str, Any]:
        job_seeker_id = await resolve_job_seeker_id(store, subject_id)
        with mapped_errors(f"count {self.label}"):
            existing = await store.count(
                self.model, self.model.job_seeker_id == job_seeker_id,
            )
        if existing >= self.max_entries:
            raise DatabaseError(self.limit_message, 400)

        values = self.prepare(body.model_dump())
        with mapped_errors(f"create {self.label}"):
            created = await store.insert(self.model(job_seeker_id=job_seeker_id, **values))
        logger.info(f"{self.label} entry {created.id} created", extra={"user_id": subject_id})
        return created.to_dict()

    async def update(
        self, store: RowStore, entry_id: UUID, subject_id: str, body: RequestModel,
    ) -> dict[str, Any]:
        entry = await self._owned_entry(store, entry_id, subject_id, "update")
        values = body.changes()
        if not values:
            return entry.to_dict()
        with mapped_errors(f"update {self.label}"):
            updated = await store.update(self.model, values, self.model.id == entry_id)
        return updated.to_dict()

    async def delete(self, store: RowStore, entry_id: UUID, subject_id: str) -> None:
        await self._owned_entry(store, entry_id, subject_id, "delete")
        with mapped_errors(f"delete {self.label}"):
            await store.delete(self.model, self.model.id == entry_id)
        logger.info(f"{self.label} entry {entry_id} deleted", extra={"user_id": subject_id})

    async def _owned_entry(
        self, store: RowStore, entry_id: UUID, subject_id: str, verb: str,
    ):
        job_seeker_id = await resolve_job_seeker_id(store, subject_id)
        with mapped_errors(f"fetch {self.label}"):
            entry = await store.fetch_optional(
                select(self.model).where(self.model.id == entry_id),
            )
        if not entry:
            raise NotFoundError(self.missing_message)
        if entry.job_seeker_id != job_seeker_id:
            raise ForbiddenError(
                f"You do not have permission to {verb} this {self.label.lower()} entry",
            )
        return entry


class _ExperienceSection(ProfileSection):
    def prepare(self, values: dict[str, Any]) -> dict[str, Any]:
        """Fill in a missing duration from the position's dates."""
        if not values.get("duration"):
            start = values.get("start_date")
            values["duration"] = (
                calculate_duration(start, values.get("end_date")) if start else ""
            )
        return values


education = ProfileSection(
    model=Education,
    order_column="year",
    max_entries=MAX_EDUCATION_ENTRIES,
    limit_message=f"Maximum {MAX_EDUCATION_ENTRIES} education entries allowed",
    missing_message="Education entry not found",
    label="Education",
)

experience = _ExperienceSection(
    model=WorkHistory,
    order_column="start_date",
    max_entries=MAX_EXPERIENCE_ENTRIES,
    limit_message=f"Maximum {MAX_EXPERIENCE_ENTRIES} work experience entries allowed",
    missing_message="Work experience entry not found",
    label="Work experience",
)

certifications = ProfileSection(
    model=Certification,
    order_column="issue_date",
    max_entries=MAX_CERTIFICATION_ENTRIES,
    limit_message=f"Maximum {MAX_CERTIFICATION_ENTRIES} certifications allowed",
    missing_message="Certification not found",
    label="Certification",
)
