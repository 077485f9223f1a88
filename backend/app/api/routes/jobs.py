"""Job Posting routes: public browsing plus employer-owned mutations.

Invariants:
    - GET /jobs, GET /jobs/{id} and POST /jobs/{id}/view need no credential
    - /jobs/employer/me* is declared before /jobs/{job_id} so "employer" never
      parses as a job id
    - Non-owner PUT/DELETE is 403
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from app.api.dependencies import (
    get_current_caller, get_optional_caller, get_optional_store, get_public_store,
    get_store, require_user_type,
)
from app.api.envelope import ok
from app.core.domain_types import UserType
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.job import JobCreate, JobFilters, JobUpdate
from app.services import jobs as job_service

router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])


@router.get("")
async def list_jobs(
    filters: Annotated[JobFilters, Query()],
    store: RowStore = Depends(get_public_store),
):
    """Active postings, newest first, one page at a time."""
    page = await job_service.list_public(store, filters)
    return ok(page["data"], pagination=page["pagination"])


@router.get("/employer/me")
async def list_my_jobs(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await job_service.list_for_employer(store, caller.subject_id))


@router.get("/employer/me/count")
async def count_my_jobs(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    count = await job_service.count_for_employer(store, caller.subject_id)
    return ok({"count": count})


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_job(
    request: Request,
    body: JobCreate,
    caller: Caller = Depends(require_user_type(UserType.EMPLOYER)),
    store: RowStore = Depends(get_store),
):
    job = await job_service.create(store, caller.subject_id, body)
    return ok(job, "Job created successfully")


@router.post("/{job_id}/view")
async def record_job_view(
    job_id: UUID, store: RowStore = Depends(get_public_store),
):
    await job_service.record_view(store, job_id)
    return ok(None, "View count incremented")


@router.get("/{job_id}")
async def get_job(
    job_id: UUID,
    caller: Caller | None = Depends(get_optional_caller),
    store: RowStore = Depends(get_optional_store),
):
    return ok(await job_service.get_detail(store, job_id, caller))


@router.put("/{job_id}")
@mutation_limit
async def update_job(
    request: Request,
    job_id: UUID,
    body: JobUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    job = await job_service.update(store, job_id, caller.subject_id, body)
    return ok(job, "Job updated successfully")


@router.delete("/{job_id}")
@mutation_limit
async def delete_job(
    request: Request,
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await job_service.delete(store, job_id, caller.subject_id)
    return ok(None, "Job deleted successfully")
