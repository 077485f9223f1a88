"""Health & Readiness Probes: liveness, readiness and full health for orchestration.

Invariants:
    - GET /api/health/live always returns 200 while the process can respond
    - GET /api/health/ready and GET /api/health return 503 when the one-row
      database probe fails or exceeds its timeout
    - Probes are unauthenticated and unversioned

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer (ADR: production readiness)
    - db_manager looked up at request time: it is created during lifespan startup
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _database_ok() -> bool:
    manager = database.db_manager
    if manager is None:
        return False
    return await manager.health_check(get_settings().health_check_timeout_seconds)


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness():
    """Returns 200 if the process is up."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/ready")
async def readiness():
    if not await _database_ok():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not ready",
                "reason": "Database connection failed",
                "timestamp": _now(),
            },
        )
    return {"status": "ready", "timestamp": _now()}


@router.get("")
async def health():
    """Full health report with per-dependency checks and probe latency."""
    start = time.perf_counter()
    db_ok = await _database_ok()
    body = {
        "status": "healthy" if db_ok else "unhealthy",
        "timestamp": _now(),
        "version": get_settings().app_version,
        "checks": {"database": "ok" if db_ok else "error"},
        "responseTime": f"{round((time.perf_counter() - start) * 1000)}ms",
    }
    if not db_ok:
        logger.warning("Health check failed: database probe")
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
