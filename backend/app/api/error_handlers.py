"""Error Handlers: the terminal fault handler for the HealthJobs API.

Invariants:
    - AppError -> its own envelope and status, logged at a level matching severity
    - RequestValidationError -> 400 "Invalid request data" with [{field, message}]
    - Unmatched route -> 404 "Route {METHOD} {path} not found"
    - RateLimitExceeded -> 429 RATE_LIMITED, message naming the exhausted window
    - Exception (catch-all) -> 500; the real message and a "stack" list only
      outside production
    - Every failure envelope and response header carries the correlation id

Design Decisions:
    - Four-layer handler: domain (AppError), validation (Pydantic), HTTP (Starlette),
      catch-all (Exception); extracted from main.py (ADR: import fan-out < 10)
    - The catch-all runs outside the user middleware stack, after the correlation
      context is gone: the id is read back from request.state instead
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.core.errors import (
    AppError, ErrorSeverity, InternalServerError, NotFoundError, ValidationError,
)
from app.infrastructure.correlation import CORRELATION_HEADER, get_correlation_id
from app.infrastructure.rate_limit import GENERAL_MESSAGE
from app.infrastructure.security_headers import apply_security_headers

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

_REQUEST_SECTIONS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, generic_error_handler)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or get_correlation_id()


def _respond(request: Request, error: AppError) -> JSONResponse:
    correlation_id = _correlation_id(request)
    return JSONResponse(
        status_code=error.http_status,
        content=error.to_response(correlation_id),
        headers={CORRELATION_HEADER: correlation_id},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle all domain/infrastructure errors."""
    level = _LOG_LEVELS.get(exc.severity, logging.ERROR)
    if exc.http_status < 500:
        level = min(level, logging.WARNING)
    logger.log(
        level,
        f"{exc.error_name}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path, "method": request.method},
    )
    return _respond(request, exc)


def _field_name(loc) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_SECTIONS:
        parts = parts[1:]
    return ".".join(parts)


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    details = [
        {"field": _field_name(e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _respond(request, ValidationError(details=details))


async def http_error_handler(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = NotFoundError(f"Route {request.method} {request.url.path} not found")
    else:
        error = AppError(
            str(exc.detail), code=f"HTTP_{exc.status_code}", http_status=exc.status_code,
        )
    logger.warning(
        error.message,
        extra={"error_code": error.code, "path": request.url.path, "method": request.method},
    )
    return _respond(request, error)


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Sync on purpose: slowapi's middleware calls the handler without awaiting."""
    message = getattr(exc.limit, "error_message", None)
    if not isinstance(message, str) or not message:
        message = GENERAL_MESSAGE
    logger.warning(
        f"Rate limit exceeded on {request.url.path}: {exc.detail}",
        extra={"error_code": "RATE_LIMITED", "path": request.url.path},
    )
    correlation_id = _correlation_id(request)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "success": False,
            "error": "TooManyRequests",
            "message": message,
            "code": "RATE_LIMITED",
            "correlationId": correlation_id,
        },
        headers={CORRELATION_HEADER: correlation_id},
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: never leaks internal details in production.

    Runs in ServerErrorMiddleware, outside every user middleware, so the
    security headers are applied here as well.
    """
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_SERVER_ERROR", "path": request.url.path},
    )
    correlation_id = _correlation_id(request)
    if get_settings().is_production:
        body = InternalServerError("An unexpected error occurred").to_response(correlation_id)
    else:
        body = InternalServerError(str(exc) or type(exc).__name__).to_response(correlation_id)
        body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    response = JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body,
        headers={CORRELATION_HEADER: correlation_id},
    )
    return apply_security_headers(response, request.url.path)
