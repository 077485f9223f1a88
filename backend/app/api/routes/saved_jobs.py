"""Saved Job routes: a job seeker's bookmarks."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.saved_job import SaveJobRequest
from app.services import saved_jobs as saved_job_service

router = APIRouter(prefix="/api/v1/saved-jobs", tags=["saved-jobs"])


@router.get("")
async def list_saved_jobs(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await saved_job_service.list_saved(store, caller.subject_id))


@router.get("/details")
async def list_saved_job_details(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await saved_job_service.list_with_details(store, caller.subject_id))


@router.get("/count")
async def count_saved_jobs(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok({"count": await saved_job_service.count_saved(store, caller.subject_id)})


@router.get("/check/{job_id}")
async def check_saved(
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    saved = await saved_job_service.is_saved(store, caller.subject_id, job_id)
    return ok({"isSaved": saved})


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def save_job(
    request: Request,
    body: SaveJobRequest,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    saved = await saved_job_service.save(store, caller.subject_id, body.job_id)
    return ok(saved, "Job saved successfully")


@router.delete("/{job_id}")
@mutation_limit
async def unsave_job(
    request: Request,
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await saved_job_service.unsave(store, caller.subject_id, job_id)
    return ok(None, "Job unsaved successfully")
