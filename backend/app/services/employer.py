"""Employer Profile Service: the caller's employers row.

Invariants:
    - One employer profile per subject (ConflictError before insert)
    - update/delete act on the row resolved from the caller's subject, never on a client-supplied id
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.core.errors import ConflictError, NotFoundError
from app.infrastructure.row_store import RowStore
from app.models.employer import Employer
from app.schemas.employer import EmployerCreate, EmployerUpdate
from app.services.common import mapped_errors, utcnow
from app.services.ownership import subject_uuid

logger = logging.getLogger(__name__)


async def _own_profile(store: RowStore, subject_id: str) -> Employer | None:
    with mapped_errors("fetch employer profile"):
        return await store.fetch_optional(
            select(Employer).where(Employer.user_id == subject_uuid(subject_id)),
        )


async def get_current(store: RowStore, subject_id: str) -> dict[str, Any] | None:
    employer = await _own_profile(store, subject_id)
    return employer.to_dict() if employer else None


async def get_by_id(store: RowStore, employer_id: UUID) -> dict[str, Any]:
    with mapped_errors("fetch employer"):
        employer = await store.fetch_optional(
            select(Employer).where(Employer.id == employer_id),
        )
    if not employer:
        raise NotFoundError("Employer profile not found")
    return employer.to_dict()


async def create(
    store: RowStore, subject_id: str, body: EmployerCreate,
) -> dict[str, Any]:
    if await _own_profile(store, subject_id):
        raise ConflictError("Employer profile already exists")
    with mapped_errors("create employer profile"):
        employer = await store.insert(Employer(
            user_id=subject_uuid(subject_id), **body.model_dump(),
        ))
    logger.info("Employer profile created", extra={"user_id": subject_id})
    return employer.to_dict()


async def update(
    store: RowStore, subject_id: str, body: EmployerUpdate,
) -> dict[str, Any]:
    existing = await _own_profile(store, subject_id)
    if not existing:
        raise NotFoundError("Employer profile not found")
    with mapped_errors("update employer profile"):
        employer = await store.update(
            Employer,
            {**body.changes(), "updated_at": utcnow()},
            Employer.id == existing.id,
        )
    return employer.to_dict()


async def delete(store: RowStore, subject_id: str) -> None:
    existing = await _own_profile(store, subject_id)
    if not existing:
        raise NotFoundError("Employer profile not found")
    with mapped_errors("delete employer profile"):
        await store.delete(Employer, Employer.id == existing.id)
    logger.info("Employer profile deleted", extra={"user_id": subject_id})
