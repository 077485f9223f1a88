"""Saved Job Service: a job seeker's bookmarks.

Invariants:
    - (job_seeker_id, job_id) is unique: saving twice is 409 "Job is already saved",
      whether caught by the pre-check or by the unique index in a race
    - Reads (list, details, count, check) are Tier 2 and degrade to [] / 0 / False
    - Unsaving an unsaved job is a no-op
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.core.errors import ConflictError, NotFoundError
from app.core.error_taxonomy import is_unique_violation
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.employer import Employer
from app.models.job import Job
from app.models.saved_job import SavedJob
from app.services.common import mapped_errors, rows, utcnow
from app.services.jobs import children_by_job
from app.services.ownership import resolve_job_seeker_id

logger = logging.getLogger(__name__)

_DETAIL_FIELDS = (
    "id", "title", "location", "employment_type", "category", "salary_display",
    "salary_min", "salary_max", "posted_date", "description", "facility_type",
    "is_urgent", "experience",
)


async def list_saved(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    try:
        found = await store.fetch_all(
            select(SavedJob).where(SavedJob.job_seeker_id == job_seeker_id)
            .order_by(SavedJob.saved_date.desc()),
        )
    except PersistenceError as exc:
        logger.warning(f"Saved jobs unavailable: {exc.message}")
        return []
    return rows(found)


async def list_with_details(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    """Bookmarks joined with a job summary, requirements, benefits and facility."""
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    try:
        found = await store.fetch_rows(
            select(SavedJob, Job, Employer.facility_name)
            .outerjoin(Job, Job.id == SavedJob.job_id)
            .outerjoin(Employer, Employer.id == Job.employer_id)
            .where(SavedJob.job_seeker_id == job_seeker_id)
            .order_by(SavedJob.saved_date.desc()),
        )
    except PersistenceError as exc:
        logger.warning(f"Saved job details unavailable: {exc.message}")
        return []

    children = await children_by_job(store, [job.id for _, job, _ in found if job])
    detailed = []
    for saved, job, facility_name in found:
        item = saved.to_dict()
        if job is None:
            item["job"] = None
        else:
            summary = {name: getattr(job, name) for name in _DETAIL_FIELDS}
            summary["requirements"] = children[job.id]["requirements"]
            summary["benefits"] = children[job.id]["benefits"]
            summary["employers"] = {"facility_name": facility_name} if facility_name else None
            item["job"] = summary
        detailed.append(item)
    return detailed


async def count_saved(store: RowStore, subject_id: str) -> int:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    try:
        return await store.count(SavedJob, SavedJob.job_seeker_id == job_seeker_id)
    except PersistenceError as exc:
        logger.warning(f"Saved job count unavailable: {exc.message}")
        return 0


async def is_saved(store: RowStore, subject_id: str, job_id: UUID) -> bool:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    try:
        found = await store.fetch_optional(
            select(SavedJob.id).where(
                SavedJob.job_seeker_id == job_seeker_id, SavedJob.job_id == job_id,
            ),
        )
    except PersistenceError as exc:
        logger.warning(f"Saved job check failed: {exc.message}")
        return False
    return found is not None


async def save(store: RowStore, subject_id: str, job_id: UUID) -> dict[str, Any]:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    with mapped_errors("check saved job"):
        existing = await store.fetch_optional(
            select(SavedJob.id).where(
                SavedJob.job_seeker_id == job_seeker_id, SavedJob.job_id == job_id,
            ),
        )
        job = await store.fetch_optional(select(Job.id).where(Job.id == job_id))
    if existing:
        raise ConflictError("Job is already saved")
    if job is None:
        raise NotFoundError("Job not found")

    try:
        saved = await store.insert(
            SavedJob(job_seeker_id=job_seeker_id, job_id=job_id, saved_date=utcnow()),
        )
    except PersistenceError as exc:
        if is_unique_violation(exc.code):
            raise ConflictError("Job is already saved") from exc
        with mapped_errors("save job"):
            raise
    return saved.to_dict()


async def unsave(store: RowStore, subject_id: str, job_id: UUID) -> None:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    with mapped_errors("unsave job"):
        await store.delete(
            SavedJob,
            SavedJob.job_seeker_id == job_seeker_id, SavedJob.job_id == job_id,
        )
