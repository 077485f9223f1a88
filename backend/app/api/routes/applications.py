"""Application routes: applying, reviewing and withdrawing.

Invariants:
    - Every route requires a bearer credential
    - Literal paths (/me, /check, /employer/me, /job/...) precede /{application_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_store, require_user_type
from app.api.envelope import ok
from app.core.domain_types import UserType
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from app.services import applications as application_service

router = APIRouter(prefix="/api/v1/applications", tags=["applications"])


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_application(
    request: Request,
    body: ApplicationCreate,
    caller: Caller = Depends(require_user_type(UserType.JOB_SEEKER)),
    store: RowStore = Depends(get_store),
):
    application = await application_service.create(store, caller.subject_id, body)
    return ok(application, "Application submitted successfully")


@router.get("/me")
async def list_my_applications(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await application_service.list_for_job_seeker(store, caller.subject_id))


@router.get("/check")
async def check_applied(
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    applied = await application_service.has_applied(store, caller.subject_id, job_id)
    return ok({"hasApplied": applied})


@router.get("/employer/me")
async def list_employer_applications(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await application_service.list_for_employer(store, caller.subject_id))


@router.get("/job/{job_id}")
async def list_job_applications(
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await application_service.list_for_job(store, job_id, caller.subject_id))


@router.get("/job/{job_id}/stats")
async def job_application_stats(
    job_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await application_service.stats_for_job(store, job_id, caller.subject_id))


@router.get("/{application_id}")
async def get_application(
    application_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(
        await application_service.get_by_id(store, application_id, caller.subject_id),
    )


@router.put("/{application_id}/status")
@mutation_limit
async def update_application_status(
    request: Request,
    application_id: UUID,
    body: ApplicationStatusUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    application = await application_service.update_status(
        store, application_id, caller.subject_id, body,
    )
    return ok(application, "Application status updated successfully")


@router.delete("/{application_id}")
@mutation_limit
async def withdraw_application(
    request: Request,
    application_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await application_service.withdraw(store, application_id, caller.subject_id)
    return ok(None, "Application withdrawn successfully")
