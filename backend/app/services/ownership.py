"""Ownership Resolver: token subject -> owner profile id.

Invariants:
    - Exactly one keyed lookup (user_id = subject) per call, never cached:
      the answer always reflects current ownership under the caller's credential
    - Zero matches is NotFoundError("<kind> profile not found"); profiles are never
      created implicitly
    - A subject that is not a UUID cannot own anything: InvalidTokenError
"""

from uuid import UUID

from sqlalchemy import select

from app.core.domain_types import OwnerKind
from app.core.errors import InvalidTokenError, NotFoundError
from app.infrastructure.row_store import RowStore
from app.models.employer import Employer
from app.models.job_seeker import JobSeeker
from app.services.common import mapped_errors

_PROFILE_TABLES = {
    OwnerKind.JOB_SEEKER: (JobSeeker, "Job seeker profile not found"),
    OwnerKind.EMPLOYER: (Employer, "Employer profile not found"),
}


def subject_uuid(subject_id: str) -> UUID:
    try:
        return UUID(subject_id)
    except ValueError:
        raise InvalidTokenError("Token subject is not a valid user id")


async def resolve_owner_id(
    store: RowStore, subject_id: str, kind: OwnerKind,
) -> UUID:
    """Return the caller's job-seeker or employer id, or raise NotFoundError."""
    model, missing_message = _PROFILE_TABLES[kind]
    with mapped_errors(f"resolve {kind.value} profile"):
        owner_id = await store.fetch_optional(
            select(model.id).where(model.user_id == subject_uuid(subject_id)),
        )
    if owner_id is None:
        raise NotFoundError(missing_message)
    return owner_id


async def resolve_job_seeker_id(store: RowStore, subject_id: str) -> UUID:
    return await resolve_owner_id(store, subject_id, OwnerKind.JOB_SEEKER)


async def resolve_employer_id(store: RowStore, subject_id: str) -> UUID:
    return await resolve_owner_id(store, subject_id, OwnerKind.EMPLOYER)
