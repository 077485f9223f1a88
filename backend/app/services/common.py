"""Service plumbing: taxonomy translation and row serialization.

Invariants:
    - A PersistenceError leaves the service layer as exactly one AppError:
      NotFoundError when the taxonomy says 404, DatabaseError (with the
      taxonomy status) otherwise
    - Raw driver messages are logged, never returned to the caller
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator

from app.core.error_taxonomy import map_error
from app.core.errors import AppError, DatabaseError, NotFoundError
from app.db.base import Base
from app.infrastructure.row_store import PersistenceError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_app_error(exc: PersistenceError) -> AppError:
    mapped = map_error(exc.code, exc.message, exc.details)
    if mapped.http_status == 404:
        return NotFoundError(mapped.message)
    return DatabaseError(mapped.message, mapped.http_status)


@contextmanager
def mapped_errors(action: str) -> Iterator[None]:
    """Tier 1: any persistence failure inside the block is fatal for the request."""
    try:
        yield
    except PersistenceError as exc:
        logger.error(
            f"Failed to {action}: {exc.message}",
            extra={"error_code": exc.code},
        )
        raise to_app_error(exc) from exc


def rows(items: Iterable[Base]) -> list[dict[str, Any]]:
    return [item.to_dict() for item in items]
