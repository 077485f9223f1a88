"""Dashboard routes: per-role counters. Always 200, zeros when nothing is there."""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.row_store import RowStore
from app.services import dashboard as dashboard_service

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/job-seeker")
async def job_seeker_dashboard(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await dashboard_service.job_seeker_stats(store, caller.subject_id))


@router.get("/employer")
async def employer_dashboard(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await dashboard_service.employer_stats(store, caller.subject_id))
