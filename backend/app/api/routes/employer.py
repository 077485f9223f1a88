"""Employer Profile routes: the caller's facility profile and lookups by id."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.employer import EmployerCreate, EmployerUpdate
from app.services import employer as employer_service

router = APIRouter(prefix="/api/v1/employer/profile", tags=["employer"])


@router.get("")
async def get_current_employer(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await employer_service.get_current(store, caller.subject_id)
    if profile is None:
        return ok(None, "No employer profile found for this user")
    return ok(profile)


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_employer(
    request: Request,
    body: EmployerCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await employer_service.create(store, caller.subject_id, body)
    return ok(profile, "Employer profile created successfully")


@router.put("")
@mutation_limit
async def update_employer(
    request: Request,
    body: EmployerUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await employer_service.update(store, caller.subject_id, body)
    return ok(profile, "Employer profile updated successfully")


@router.delete("")
@mutation_limit
async def delete_employer(
    request: Request,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await employer_service.delete(store, caller.subject_id)
    return ok(None, "Employer profile deleted successfully")


@router.get("/{employer_id}")
async def get_employer_by_id(
    employer_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await employer_service.get_by_id(store, employer_id))
