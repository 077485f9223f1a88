"""Application Service: job seekers apply and withdraw, employers review and decide.

Invariants:
    - Applying requires the caller's job-seeker profile, an existing job (404) that is
      active (403), and no earlier application to it (409)
    - Only the employer owning the job may list its applications, read its stats or
      change an application's status; only the applicant may withdraw
    - Single-application reads are allowed to the applicant OR the owning employer
    - Applicant e-mail enrichment is Tier 2: missing e-mail becomes ""

Design Decisions:
    - Wrong-owner reads and writes answer 403 after a 404 existence check
      (ADR: wrong-owner policy per resource kind)
    - Ownership is proven with one join up to employers.user_id / job_seekers.user_id
      rather than two extra profile lookups
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.core.domain_types import ApplicationStatus, JobStatus
from app.core.errors import AppError, ConflictError, ForbiddenError, NotFoundError
from app.core.error_taxonomy import is_unique_violation
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.application import Application
from app.models.employer import Employer
from app.models.job import Job
from app.models.job_seeker import JobSeeker
from app.models.user import User
from app.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from app.services.common import mapped_errors, utcnow
from app.services.ownership import (
    resolve_employer_id, resolve_job_seeker_id, subject_uuid,
)

logger = logging.getLogger(__name__)

_JOB_FIELDS = ("id", "title", "employer_id", "location", "employment_type", "facility_type")
_SEEKER_FIELDS = (
    "id", "first_name", "last_name", "phone", "location", "profession",
    "experience", "user_id",
)


def _pick(row, fields: tuple[str, ...]) -> dict[str, Any] | None:
    if row is None:
        return None
    return {name: getattr(row, name) for name in fields}


def empty_histogram() -> dict[str, int]:
    return {status.value: 0 for status in ApplicationStatus}


# --- job seeker side -----------------------------------------------------------

async def create(
    store: RowStore, subject_id: str, body: ApplicationCreate,
) -> dict[str, Any]:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    with mapped_errors("check existing application"):
        existing = await store.fetch_optional(
            select(Application.id).where(
                Application.job_id == body.job_id,
                Application.job_seeker_id == job_seeker_id,
            ),
        )
        job = await store.fetch_optional(select(Job).where(Job.id == body.job_id))
    if existing:
        raise ConflictError("You have already applied to this job")
    if not job:
        raise NotFoundError("Job not found")
    if job.status != JobStatus.ACTIVE.value:
        raise ForbiddenError("This job is no longer accepting applications")

    try:
        application = await store.insert(Application(
            job_id=body.job_id,
            job_seeker_id=job_seeker_id,
            status=ApplicationStatus.APPLIED.value,
            cover_letter=body.cover_letter,
            resume_url=body.resume_url,
            applied_date=utcnow(),
        ))
    except PersistenceError as exc:
        if is_unique_violation(exc.code):
            raise ConflictError("You have already applied to this job") from exc
        with mapped_errors("create application"):
            raise
    logger.info(f"Application {application.id} created", extra={"user_id": subject_id})
    return application.to_dict()


async def list_for_job_seeker(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    try:
        found = await store.fetch_rows(
            select(Application, Job)
            .outerjoin(Job, Job.id == Application.job_id)
            .where(Application.job_seeker_id == job_seeker_id)
            .order_by(Application.applied_date.desc()),
        )
    except PersistenceError as exc:
        logger.warning(f"Job seeker applications unavailable: {exc.message}")
        return []
    return [
        {**application.to_dict(), "jobs": _pick(job, _JOB_FIELDS)}
        for application, job in found
    ]


async def has_applied(store: RowStore, subject_id: str, job_id: UUID) -> bool:
    try:
        job_seeker_id = await resolve_job_seeker_id(store, subject_id)
        found = await store.fetch_optional(
            select(Application.id).where(
                Application.job_id == job_id,
                Application.job_seeker_id == job_seeker_id,
            ),
        )
    except (AppError, PersistenceError):
        return False
    return found is not None


async def withdraw(store: RowStore, application_id: UUID, subject_id: str) -> None:
    with mapped_errors("fetch application"):
        found = await store.fetch_rows(
            select(Application.id, JobSeeker.user_id)
            .join(JobSeeker, JobSeeker.id == Application.job_seeker_id)
            .where(Application.id == application_id),
        )
    if not found:
        raise NotFoundError("Application not found")
    if found[0].user_id != subject_uuid(subject_id):
        raise ForbiddenError("You do not have permission to access this application")
    with mapped_errors("withdraw application"):
        await store.delete(Application, Application.id == application_id)
    logger.info(f"Application {application_id} withdrawn", extra={"user_id": subject_id})


# --- employer side -------------------------------------------------------------

async def _emails(store: RowStore, user_ids: list[UUID]) -> dict[UUID, str]:
    if not user_ids:
        return {}
    try:
        found = await store.fetch_rows(
            select(User.id, User.email).where(User.id.in_(user_ids)),
        )
    except PersistenceError as exc:
        logger.warning(f"Applicant e-mails unavailable: {exc.message}")
        return {}
    return {row.id: row.email for row in found}


async def _enriched(store: RowStore, stmt) -> list[dict[str, Any]]:
    try:
        found = await store.fetch_rows(stmt)
    except PersistenceError as exc:
        logger.warning(f"Applications unavailable: {exc.message}")
        return []
    emails = await _emails(store, list({seeker.user_id for _, _, seeker in found if seeker}))
    enriched = []
    for application, job, seeker in found:
        item = application.to_dict()
        item["jobs"] = _pick(job, ("id", "title", "employer_id"))
        item["job_seekers"] = _pick(seeker, _SEEKER_FIELDS)
        item["job_title"] = job.title if job else None
        item["job_seeker_name"] = f"{seeker.first_name} {seeker.last_name}" if seeker else None
        item["job_seeker_email"] = emails.get(seeker.user_id, "") if seeker else ""
        item["job_seeker_phone"] = seeker.phone if seeker else None
        item["job_seeker_location"] = seeker.location if seeker else None
        item["job_seeker_profession"] = seeker.profession if seeker else None
        enriched.append(item)
    return enriched


def _applications_with_people():
    return (
        select(Application, Job, JobSeeker)
        .join(Job, Job.id == Application.job_id)
        .outerjoin(JobSeeker, JobSeeker.id == Application.job_seeker_id)
        .order_by(Application.applied_date.desc())
    )


async def list_for_employer(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    employer_id = await resolve_employer_id(store, subject_id)
    return await _enriched(
        store, _applications_with_people().where(Job.employer_id == employer_id),
    )


async def _require_job_owner(
    store: RowStore, job_id: UUID, subject_id: str, denied: str,
) -> None:
    with mapped_errors("fetch job"):
        found = await store.fetch_rows(
            select(Job.id, Employer.user_id)
            .join(Employer, Employer.id == Job.employer_id)
            .where(Job.id == job_id),
        )
    if not found:
        raise NotFoundError("Job not found")
    if found[0].user_id != subject_uuid(subject_id):
        raise ForbiddenError(denied)


async def list_for_job(
    store: RowStore, job_id: UUID, subject_id: str,
) -> list[dict[str, Any]]:
    await _require_job_owner(
        store, job_id, subject_id,
        "You do not have permission to view applications for this job",
    )
    return await _enriched(
        store, _applications_with_people().where(Application.job_id == job_id),
    )


async def stats_for_job(
    store: RowStore, job_id: UUID, subject_id: str,
) -> dict[str, Any]:
    await _require_job_owner(
        store, job_id, subject_id,
        "You do not have permission to view stats for this job",
    )
    histogram = empty_histogram()
    try:
        statuses = await store.fetch_all(
            select(Application.status).where(Application.job_id == job_id),
        )
    except PersistenceError as exc:
        logger.warning(f"Application stats unavailable: {exc.message}")
        statuses = []
    for status in statuses:
        if status in histogram:
            histogram[status] += 1
    return {"total": len(statuses), "byStatus": histogram}


async def get_by_id(
    store: RowStore, application_id: UUID, subject_id: str,
) -> dict[str, Any]:
    """One application, for its applicant or the employer owning the job."""
    with mapped_errors("fetch application"):
        found = await store.fetch_rows(
            select(Application, Job, JobSeeker, Employer.user_id)
            .outerjoin(Job, Job.id == Application.job_id)
            .outerjoin(JobSeeker, JobSeeker.id == Application.job_seeker_id)
            .outerjoin(Employer, Employer.id == Job.employer_id)
            .where(Application.id == application_id),
        )
    if not found:
        raise NotFoundError("Application not found")
    application, job, seeker, employer_user_id = found[0]
    caller_id = subject_uuid(subject_id)
    is_applicant = seeker is not None and seeker.user_id == caller_id
    if not is_applicant and employer_user_id != caller_id:
        raise ForbiddenError("You do not have permission to view this application")
    return {
        **application.to_dict(),
        "jobs": _pick(job, _JOB_FIELDS),
        "job_seekers": _pick(seeker, _SEEKER_FIELDS),
    }


async def update_status(
    store: RowStore, application_id: UUID, subject_id: str,
    body: ApplicationStatusUpdate,
) -> dict[str, Any]:
    with mapped_errors("fetch application"):
        found = await store.fetch_rows(
            select(Application.id, Employer.user_id)
            .join(Job, Job.id == Application.job_id)
            .join(Employer, Employer.id == Job.employer_id)
            .where(Application.id == application_id),
        )
    if not found:
        raise NotFoundError("Application not found")
    if found[0].user_id != subject_uuid(subject_id):
        raise ForbiddenError("You do not have permission to access this application")
    with mapped_errors("update application status"):
        application = await store.update(
            Application,
            {**body.changes(), "updated_at": utcnow()},
            Application.id == application_id,
        )
    logger.info(
        f"Application {application_id} moved to {body.status}",
        extra={"user_id": subject_id},
    )
    return application.to_dict()
