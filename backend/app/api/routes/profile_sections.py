"""Profile Section routes: /education, /experience and /certifications.

Invariants:
    - The three routers share one shape: GET list, POST (201), PUT/{id}, DELETE/{id}
    - Every route requires a bearer credential
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.profile_sections import (
    CertificationCreate, CertificationUpdate, EducationCreate, EducationUpdate,
    ExperienceCreate, ExperienceUpdate,
)
from app.services.profile_sections import certifications, education, experience

education_router = APIRouter(prefix="/api/v1/education", tags=["education"])
experience_router = APIRouter(prefix="/api/v1/experience", tags=["experience"])
certification_router = APIRouter(prefix="/api/v1/certifications", tags=["certifications"])


# --- education -------------------------------------------------------------

@education_router.get("")
async def list_education(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await education.list_mine(store, caller.subject_id))


@education_router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_education(
    request: Request,
    body: EducationCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await education.create(store, caller.subject_id, body)
    return ok(entry, "Education entry created successfully")


@education_router.put("/{entry_id}")
@mutation_limit
async def update_education(
    request: Request,
    entry_id: UUID,
    body: EducationUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await education.update(store, entry_id, caller.subject_id, body)
    return ok(entry, "Education entry updated successfully")


@education_router.delete("/{entry_id}")
@mutation_limit
async def delete_education(
    request: Request,
    entry_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await education.delete(store, entry_id, caller.subject_id)
    return ok(None, "Education entry deleted successfully")


# --- work experience -------------------------------------------------------

@experience_router.get("")
async def list_experience(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await experience.list_mine(store, caller.subject_id))


@experience_router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_experience(
    request: Request,
    body: ExperienceCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await experience.create(store, caller.subject_id, body)
    return ok(entry, "Work experience entry created successfully")


@experience_router.put("/{entry_id}")
@mutation_limit
async def update_experience(
    request: Request,
    entry_id: UUID,
    body: ExperienceUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await experience.update(store, entry_id, caller.subject_id, body)
    return ok(entry, "Work experience entry updated successfully")


@experience_router.delete("/{entry_id}")
@mutation_limit
async def delete_experience(
    request: Request,
    entry_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await experience.delete(store, entry_id, caller.subject_id)
    return ok(None, "Work experience entry deleted successfully")


# --- certifications --------------------------------------------------------

@certification_router.get("")
async def list_certifications(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await certifications.list_mine(store, caller.subject_id))


@certification_router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_certification(
    request: Request,
    body: CertificationCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await certifications.create(store, caller.subject_id, body)
    return ok(entry, "Certification created successfully")


@certification_router.put("/{entry_id}")
@mutation_limit
async def update_certification(
    request: Request,
    entry_id: UUID,
    body: CertificationUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    entry = await certifications.update(store, entry_id, caller.subject_id, body)
    return ok(entry, "Certification updated successfully")


@certification_router.delete("/{entry_id}")
@mutation_limit
async def delete_certification(
    request: Request,
    entry_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await certifications.delete(store, entry_id, caller.subject_id)
    return ok(None, "Certification deleted successfully")
