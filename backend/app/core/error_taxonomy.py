"""Error Taxonomy: persistence error code to {user message, HTTP status}.

Invariants:
    - The table is built once at import and is read-only (MappingProxyType)
    - map_error() is pure: same inputs, same MappedError, no IO
    - Unknown codes fall back to 500 "An unexpected error occurred", except
      zero-row results which are 404 whatever code they arrived with

Design Decisions:
    - Keyed by PostgreSQL SQLSTATE plus the PostgREST-style gateway codes
      (PGRST*) so the same table serves the asyncpg driver and row-store codes
      (ADR: one table, consulted by every service, never duplicated)
    - Messages are safe to show to end users; raw driver text only goes to logs
"""

from dataclasses import dataclass
from types import MappingProxyType

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
INSUFFICIENT_PRIVILEGE = "42501"
UNDEFINED_TABLE = "42P01"
NO_ROWS = "PGRST116"
MULTIPLE_ROWS = "PGRST102"

GENERIC_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True)
class MappedError:
    """What the caller is allowed to see for a persistence failure."""
    message: str
    http_status: int


ERROR_TABLE: MappingProxyType = MappingProxyType({
    UNIQUE_VIOLATION: MappedError("A record with this value already exists", 409),
    FOREIGN_KEY_VIOLATION: MappedError("Referenced record does not exist", 400),
    NOT_NULL_VIOLATION: MappedError("A required field is missing", 400),
    CHECK_VIOLATION: MappedError("Value does not meet requirements", 400),
    INSUFFICIENT_PRIVILEGE: MappedError(
        "You do not have permission to perform this action", 403,
    ),
    # RLS hides tables from roles without grants
    UNDEFINED_TABLE: MappedError("Access denied", 403),
    NO_ROWS: MappedError("Record not found", 404),
    MULTIPLE_ROWS: MappedError("Multiple records found", 409),
    "PGRST301": MappedError("Authentication failed", 401),
    "PGRST302": MappedError("Invalid authentication token", 401),
    "28000": MappedError("Authentication failed", 401),
    "28P01": MappedError("Authentication failed", 401),
})

_FALLBACK = MappedError(GENERIC_MESSAGE, 500)


def _looks_like_zero_rows(message: str | None, details: str | None) -> bool:
    return bool(
        (message and "rows returned" in message)
        or (details and "0 rows" in details)
    )


def map_error(
    code: str | None, message: str | None = None, details: str | None = None,
) -> MappedError:
    """Translate a persistence error into a user-facing message and status."""
    if code and code in ERROR_TABLE:
        return ERROR_TABLE[code]
    if _looks_like_zero_rows(message, details):
        return ERROR_TABLE[NO_ROWS]
    return _FALLBACK


def is_not_found_error(
    code: str | None, message: str | None = None, details: str | None = None,
) -> bool:
    """True when the failure means "no matching row"."""
    return code == NO_ROWS or _looks_like_zero_rows(message, details)


def is_unique_violation(code: str | None) -> bool:
    return code == UNIQUE_VIOLATION
