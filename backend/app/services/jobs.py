"""Job Posting Service: public listing/detail plus employer-owned mutations.

Invariants:
    - Public listing returns only status=active postings, newest posted_date first,
      with an exact total for pagination
    - A non-active posting is visible only to the employer who owns it
    - update/delete: resolve caller's employer id, fetch the job (404 if absent),
      compare owners (403 on mismatch), THEN mutate
    - Requirement/benefit/tag rows are secondary (Tier 3 on write, Tier 2 on read):
      their failures are logged and never fail the parent operation
    - View counting is one atomic server-side increment, best effort

Design Decisions:
    - Non-owners get 403 rather than 404 on mutations: posting existence is public
      information anyway (ADR: wrong-owner policy per resource kind)
    - Children fetched in one IN (...) query per child table for a whole page,
      not per job
"""

import logging
from math import ceil
from typing import Any
from uuid import UUID

from sqlalchemy import or_, select, update as sql_update

from app.core.domain_types import (
    ALL_CATEGORIES, ALL_FACILITIES, ALL_LOCATIONS, JobStatus,
)
from app.core.errors import AppError, ForbiddenError, NotFoundError
from app.core.identity import Caller
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.employer import Employer
from app.models.job import Job, JobBenefit, JobRequirement, JobTag
from app.schemas.job import JobCreate, JobFilters, JobUpdate
from app.services.common import mapped_errors, utcnow
from app.services.ownership import resolve_employer_id

logger = logging.getLogger(__name__)

# (model, value column, response key)
_CHILD_TABLES = (
    (JobRequirement, "requirement", "requirements"),
    (JobBenefit, "benefit", "benefits"),
    (JobTag, "tag", "tags"),
)


# --- reads ---------------------------------------------------------------------

def _listing_criteria(filters: JobFilters) -> list:
    criteria = [Job.status == JobStatus.ACTIVE.value]
    if filters.category and filters.category != ALL_CATEGORIES:
        criteria.append(Job.category == filters.category)
    if filters.location and filters.location != ALL_LOCATIONS:
        criteria.append(Job.location.ilike(f"%{filters.location}%"))
    if filters.employment_type:
        criteria.append(Job.employment_type == filters.employment_type)
    if filters.experience:
        criteria.append(Job.experience == filters.experience)
    if filters.facility_type and filters.facility_type != ALL_FACILITIES:
        criteria.append(Job.facility_type == filters.facility_type)
    if filters.search:
        pattern = f"%{filters.search}%"
        criteria.append(or_(Job.title.ilike(pattern), Job.description.ilike(pattern)))
    return criteria


async def children_by_job(
    store: RowStore, job_ids: list[UUID],
) -> dict[UUID, dict[str, list]]:
    grouped = {job_id: {key: [] for _, _, key in _CHILD_TABLES} for job_id in job_ids}
    if not job_ids:
        return grouped
    for model, _, key in _CHILD_TABLES:
        try:
            items = await store.fetch_all(
                select(model).where(model.job_id.in_(job_ids))
                .order_by(model.created_at, model.id),
            )
        except PersistenceError as exc:
            logger.warning(f"Job {key} unavailable: {exc.message}")
            continue
        for item in items:
            grouped[item.job_id][key].append(item.to_dict())
    return grouped


def _serialize(job: Job, facility_name: str | None, children: dict[str, list]) -> dict[str, Any]:
    data = job.to_dict()
    data.update(children)
    data["employers"] = {"facility_name": facility_name} if facility_name else None
    return data


def _with_facility():
    return select(Job, Employer.facility_name).outerjoin(
        Employer, Employer.id == Job.employer_id,
    )


async def list_public(store: RowStore, filters: JobFilters) -> dict[str, Any]:
    """One page of active postings plus pagination metadata."""
    criteria = _listing_criteria(filters)
    with mapped_errors("fetch jobs"):
        total = await store.count(Job, *criteria)
        found = await store.fetch_rows(
            _with_facility().where(*criteria)
            .order_by(Job.posted_date.desc(), Job.id)
            .offset(filters.offset).limit(filters.limit),
        )
    children = await children_by_job(store, [job.id for job, _ in found])
    return {
        "data": [_serialize(job, name, children[job.id]) for job, name in found],
        "pagination": {
            "page": filters.page,
            "limit": filters.limit,
            "total": total,
            "totalPages": ceil(total / filters.limit),
        },
    }


async def _fetch_detail(store: RowStore, job_id: UUID) -> tuple[Job, dict[str, Any]] | None:
    with mapped_errors("fetch job"):
        found = await store.fetch_rows(_with_facility().where(Job.id == job_id))
    if not found:
        return None
    job, facility_name = found[0]
    children = await children_by_job(store, [job.id])
    return job, _serialize(job, facility_name, children[job.id])


async def _owns(store: RowStore, caller: Caller | None, job: Job) -> bool:
    if caller is None:
        return False
    try:
        return await resolve_employer_id(store, caller.subject_id) == job.employer_id
    except AppError:
        return False


async def get_detail(
    store: RowStore, job_id: UUID, caller: Caller | None = None,
) -> dict[str, Any]:
    """Full posting; unpublished postings only for their own employer."""
    found = await _fetch_detail(store, job_id)
    if found is None:
        raise NotFoundError("Job not found")
    job, data = found
    if job.status != JobStatus.ACTIVE.value and not await _owns(store, caller, job):
        raise NotFoundError("Job not found")
    return data


async def list_for_employer(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    """Caller's own postings, any status. Degrades to []."""
    try:
        employer_id = await resolve_employer_id(store, subject_id)
        jobs = await store.fetch_all(
            select(Job).where(Job.employer_id == employer_id)
            .order_by(Job.posted_date.desc()),
        )
    except (AppError, PersistenceError) as exc:
        logger.warning(f"Employer jobs unavailable: {exc}")
        return []
    children = await children_by_job(store, [job.id for job in jobs])
    return [{**job.to_dict(), **children[job.id]} for job in jobs]


async def count_for_employer(store: RowStore, subject_id: str) -> int:
    try:
        employer_id = await resolve_employer_id(store, subject_id)
        return await store.count(Job, Job.employer_id == employer_id)
    except (AppError, PersistenceError) as exc:
        logger.warning(f"Employer job count unavailable: {exc}")
        return 0


# --- writes --------------------------------------------------------------------

async def _replace_children(
    store: RowStore, job_id: UUID, model, column: str, values: list[str] | None,
) -> None:
    """Tier 3: swap a child set; failures are logged, never raised."""
    if values is None:
        return
    try:
        await store.delete(model, model.job_id == job_id)
        await store.insert_many([model(job_id=job_id, **{column: v}) for v in values])
    except PersistenceError as exc:
        logger.warning(
            f"Could not replace {model.__tablename__} for job {job_id}: {exc.message}",
        )


async def _owned_job(store: RowStore, job_id: UUID, subject_id: str, verb: str) -> tuple[Job, UUID]:
    employer_id = await resolve_employer_id(store, subject_id)
    with mapped_errors("fetch job"):
        job = await store.fetch_optional(select(Job).where(Job.id == job_id))
    if not job:
        raise NotFoundError("Job not found")
    if job.employer_id != employer_id:
        raise ForbiddenError(f"You do not have permission to {verb} this job")
    return job, employer_id


async def create(store: RowStore, subject_id: str, body: JobCreate) -> dict[str, Any]:
    employer_id = await resolve_employer_id(store, subject_id)
    fields = body.model_dump(exclude={"requirements", "benefits", "tags"})
    with mapped_errors("create job"):
        job = await store.insert(Job(employer_id=employer_id, posted_date=utcnow(), **fields))
    for model, column, key in _CHILD_TABLES:
        values = getattr(body, key)
        if values:
            await _replace_children(store, job.id, model, column, values)
    logger.info(f"Job {job.id} created", extra={"user_id": subject_id})
    found = await _fetch_detail(store, job.id)
    return found[1] if found else job.to_dict()


async def update(
    store: RowStore, job_id: UUID, subject_id: str, body: JobUpdate,
) -> dict[str, Any]:
    _, employer_id = await _owned_job(store, job_id, subject_id, "update")
    fields = body.changes()
    child_values = {key: fields.pop(key, None) for _, _, key in _CHILD_TABLES}
    with mapped_errors("update job"):
        job = await store.update(
            Job,
            {**fields, "updated_at": utcnow()},
            Job.id == job_id, Job.employer_id == employer_id,
        )
    for model, column, key in _CHILD_TABLES:
        await _replace_children(store, job_id, model, column, child_values[key])
    found = await _fetch_detail(store, job_id)
    return found[1] if found else job.to_dict()


async def delete(store: RowStore, job_id: UUID, subject_id: str) -> None:
    _, employer_id = await _owned_job(store, job_id, subject_id, "delete")
    for model, _, _ in _CHILD_TABLES:
        try:
            await store.delete(model, model.job_id == job_id)
        except PersistenceError as exc:
            logger.warning(
                f"Could not clear {model.__tablename__} for job {job_id}: {exc.message}",
            )
    with mapped_errors("delete job"):
        await store.delete(Job, Job.id == job_id, Job.employer_id == employer_id)
    logger.info(f"Job {job_id} deleted", extra={"user_id": subject_id})


async def record_view(store: RowStore, job_id: UUID) -> None:
    """Tier 3: bump views_count atomically; never raises for store failures."""
    try:
        await store.execute(
            sql_update(Job)
            .where(Job.id == job_id)
            .values(views_count=Job.views_count + 1)
            .execution_options(synchronize_session=False),
        )
    except PersistenceError as exc:
        logger.warning(f"View count not incremented for job {job_id}: {exc.message}")
