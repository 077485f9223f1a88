"""Job Seeker Profile Service: the caller's own job_seekers row plus public profile views.

Invariants:
    - One profile per subject: create checks existence first and fails with
      ConflictError before attempting the insert
    - update/delete re-resolve the caller's row by subject and fail NotFound if absent
    - Public profile sections (education, experience, certifications) are Tier 2:
      a failing section becomes [] and the profile still returns
    - Recording a profile view is Tier 3: logged on failure, never fails the read
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.job_seeker import JobSeeker
from app.models.profile_view import ProfileView
from app.core.errors import ConflictError, NotFoundError
from app.schemas.profile import ProfileCreate, ProfileUpdate
from app.services import profile_sections
from app.services.common import mapped_errors, utcnow
from app.services.ownership import subject_uuid

logger = logging.getLogger(__name__)


async def _own_profile(store: RowStore, subject_id: str) -> JobSeeker | None:
    with mapped_errors("fetch profile"):
        return await store.fetch_optional(
            select(JobSeeker).where(JobSeeker.user_id == subject_uuid(subject_id)),
        )


async def get_current(store: RowStore, subject_id: str) -> dict[str, Any] | None:
    profile = await _own_profile(store, subject_id)
    return profile.to_dict() if profile else None


async def create(
    store: RowStore, subject_id: str, body: ProfileCreate,
) -> dict[str, Any]:
    if await _own_profile(store, subject_id):
        raise ConflictError("Profile already exists for this user")
    with mapped_errors("create profile"):
        profile = await store.insert(JobSeeker(
            user_id=subject_uuid(subject_id), **body.model_dump(),
        ))
    logger.info("Job seeker profile created", extra={"user_id": subject_id})
    return profile.to_dict()


async def update(
    store: RowStore, subject_id: str, body: ProfileUpdate,
) -> dict[str, Any]:
    existing = await _own_profile(store, subject_id)
    if not existing:
        raise NotFoundError("Profile not found")
    with mapped_errors("update profile"):
        profile = await store.update(
            JobSeeker,
            {**body.changes(), "updated_at": utcnow()},
            JobSeeker.id == existing.id,
        )
    return profile.to_dict()


async def delete(store: RowStore, subject_id: str) -> None:
    existing = await _own_profile(store, subject_id)
    if not existing:
        raise NotFoundError("Profile not found")
    with mapped_errors("delete profile"):
        await store.delete(JobSeeker, JobSeeker.id == existing.id)
    logger.info("Job seeker profile deleted", extra={"user_id": subject_id})


async def get_by_user_id(store: RowStore, user_id: UUID) -> dict[str, Any]:
    with mapped_errors("fetch profile by user"):
        profile = await store.fetch_optional(
            select(JobSeeker).where(JobSeeker.user_id == user_id),
        )
    if not profile:
        raise NotFoundError("Profile not found")
    return profile.to_dict()


async def _record_view(store: RowStore, job_seeker_id: UUID, viewer_id: UUID) -> None:
    try:
        await store.insert(ProfileView(job_seeker_id=job_seeker_id, viewer_id=viewer_id))
    except PersistenceError as exc:
        logger.warning(f"Profile view not recorded: {exc.message}")


async def get_public_profile(
    store: RowStore, job_seeker_id: UUID, viewer_subject_id: str,
) -> dict[str, Any]:
    """A job seeker's profile with its sections, as seen by another user."""
    with mapped_errors("fetch job seeker profile"):
        profile = await store.fetch_optional(
            select(JobSeeker).where(JobSeeker.id == job_seeker_id),
        )
    if not profile:
        raise NotFoundError("Job seeker profile not found")

    data = profile.to_dict()
    data["education"] = await profile_sections.education.list_for_owner(store, job_seeker_id)
    data["experience"] = await profile_sections.experience.list_for_owner(store, job_seeker_id)
    data["certifications"] = await profile_sections.certifications.list_for_owner(
        store, job_seeker_id,
    )

    viewer_id = subject_uuid(viewer_subject_id)
    if viewer_id != profile.user_id:
        await _record_view(store, job_seeker_id, viewer_id)
    return data
