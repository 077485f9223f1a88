"""Dashboard Service: per-role aggregate counters.

Invariants:
    - Never raises: any failure (missing profile included) returns the all-zero
      default shape, so the dashboard endpoints always answer 200
    - Histograms are reduced in process from raw status rows
    - interviewsScheduled / jobOffers mirror the matching histogram buckets
"""

import logging
from typing import Any

from sqlalchemy import select

from app.core.domain_types import ApplicationStatus, JobStatus
from app.core.errors import AppError
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.application import Application
from app.models.job import Job
from app.models.profile_view import ProfileView
from app.services.ownership import resolve_employer_id, resolve_job_seeker_id

logger = logging.getLogger(__name__)

_BUCKETS = {
    ApplicationStatus.APPLIED.value: "applied",
    ApplicationStatus.UNDER_REVIEW.value: "underReview",
    ApplicationStatus.INTERVIEW_SCHEDULED.value: "interviewScheduled",
    ApplicationStatus.OFFERED.value: "offered",
    ApplicationStatus.REJECTED.value: "rejected",
}


def _histogram(statuses) -> dict[str, int]:
    counts = {bucket: 0 for bucket in _BUCKETS.values()}
    for status in statuses:
        bucket = _BUCKETS.get(status)
        if bucket:
            counts[bucket] += 1
    return counts


def default_job_seeker_stats() -> dict[str, Any]:
    return {
        "totalApplications": 0,
        "profileViews": 0,
        "interviewsScheduled": 0,
        "jobOffers": 0,
        "applicationsByStatus": _histogram([]),
    }


def default_employer_stats() -> dict[str, Any]:
    return {
        "totalJobs": 0,
        "activeJobs": 0,
        "totalApplications": 0,
        "totalViews": 0,
        "applicationsByStatus": _histogram([]),
    }


async def job_seeker_stats(store: RowStore, subject_id: str) -> dict[str, Any]:
    try:
        job_seeker_id = await resolve_job_seeker_id(store, subject_id)
        statuses = await store.fetch_all(
            select(Application.status).where(Application.job_seeker_id == job_seeker_id),
        )
        views = await store.count(ProfileView, ProfileView.job_seeker_id == job_seeker_id)
    except (AppError, PersistenceError) as exc:
        logger.warning(f"Job seeker dashboard degraded to defaults: {exc}")
        return default_job_seeker_stats()

    histogram = _histogram(statuses)
    return {
        "totalApplications": len(statuses),
        "profileViews": views,
        "interviewsScheduled": histogram["interviewScheduled"],
        "jobOffers": histogram["offered"],
        "applicationsByStatus": histogram,
    }


async def employer_stats(store: RowStore, subject_id: str) -> dict[str, Any]:
    try:
        employer_id = await resolve_employer_id(store, subject_id)
        jobs = await store.fetch_rows(
            select(Job.id, Job.status, Job.views_count)
            .where(Job.employer_id == employer_id),
        )
        if not jobs:
            return default_employer_stats()
        statuses = await store.fetch_all(
            select(Application.status)
            .where(Application.job_id.in_([job.id for job in jobs])),
        )
    except (AppError, PersistenceError) as exc:
        logger.warning(f"Employer dashboard degraded to defaults: {exc}")
        return default_employer_stats()

    return {
        "totalJobs": len(jobs),
        "activeJobs": sum(1 for job in jobs if job.status == JobStatus.ACTIVE.value),
        "totalApplications": len(statuses),
        "totalViews": sum(job.views_count or 0 for job in jobs),
        "applicationsByStatus": _histogram(statuses),
    }
