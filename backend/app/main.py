"""HealthJobs API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AppError and friends to the failure envelope
    - CORS configured from settings (not hardcoded)
    - Correlation middleware is outermost of the user middleware: rate-limit
      rejections and CORS responses carry X-Correlation-ID too
    - Security headers sit just inside correlation, outside CORS and rate limiting,
      so every rejection is hardened before any route or auth code runs
    - Logging and database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in app.api.error_handlers (ADR: import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import (
    applications, auth, dashboard, documents, employer, health, jobs, profile,
    profile_sections, saved_jobs,
)
from app.config import get_settings
from app.infrastructure.correlation import CORRELATION_HEADER, correlation_middleware
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.infrastructure.rate_limit import limiter
from app.infrastructure.security_headers import security_headers_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.supabase_jwt_secret:
        logger.warning("SUPABASE_JWT_SECRET is not set: protected routes will answer 500")
    logger.info(f"HealthJobs API started ({settings.app_env})")
    yield
    logger.info("HealthJobs API shutting down")


settings = get_settings()

app = FastAPI(
    title="HealthJobs API", version=settings.app_version, lifespan=lifespan,
)
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", CORRELATION_HEADER],
    expose_headers=[CORRELATION_HEADER],
)
app.middleware("http")(security_headers_middleware)
app.middleware("http")(correlation_middleware)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(employer.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(profile_sections.education_router)
app.include_router(profile_sections.experience_router)
app.include_router(profile_sections.certification_router)
app.include_router(saved_jobs.router)
app.include_router(documents.router)
app.include_router(dashboard.router)
