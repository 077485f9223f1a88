"""Job Seeker Profile routes: the caller's own profile and public profile views.

Invariants:
    - Every route requires a bearer credential
    - GET /profile without a profile is 200 with data null, not 404
    - Mutations carry the mutation rate-limit window
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.profile import ProfileCreate, ProfileUpdate
from app.services import profile as profile_service

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("")
async def get_current_profile(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await profile_service.get_current(store, caller.subject_id)
    if profile is None:
        return ok(None, "No profile found for this user")
    return ok(profile)


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_profile(
    request: Request,
    body: ProfileCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await profile_service.create(store, caller.subject_id, body)
    return ok(profile, "Profile created successfully")


@router.put("")
@mutation_limit
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    profile = await profile_service.update(store, caller.subject_id, body)
    return ok(profile, "Profile updated successfully")


@router.delete("")
@mutation_limit
async def delete_profile(
    request: Request,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await profile_service.delete(store, caller.subject_id)
    return ok(None, "Profile deleted successfully")


@router.get("/job-seeker/{job_seeker_id}")
async def get_job_seeker_profile(
    job_seeker_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    """Another job seeker's profile with education, experience and certifications."""
    profile = await profile_service.get_public_profile(
        store, job_seeker_id, caller.subject_id,
    )
    return ok(profile)


@router.get("/{user_id}")
async def get_profile_by_user_id(
    user_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await profile_service.get_by_user_id(store, user_id))
