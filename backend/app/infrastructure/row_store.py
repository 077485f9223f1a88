"""Row Store: the narrow persistence interface every resource service talks to.

Invariants:
    - Every driver/ORM failure is rolled back and re-raised as PersistenceError
      carrying a taxonomy code (SQLSTATE or PGRST*), never a raw SQLAlchemy exception
    - fetch_one() means "exactly one": zero rows -> PGRST116, many -> PGRST102
    - Each mutation commits on its own: there is no cross-call transaction, so a
      failed secondary write never rolls back an already committed primary write
    - A RowStore wraps exactly one request-scoped session and is never reused

Design Decisions:
    - Thin wrapper over AsyncSession instead of a repository per table: services
      compose SQLAlchemy statements, the store owns error translation and commits
    - SQLite extended result codes translated to SQLSTATE so tests on aiosqlite
      exercise the same taxonomy rows as PostgreSQL in production
"""

import logging
from typing import Any, Sequence, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import (
    DBAPIError, MultipleResultsFound, NoResultFound, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from app.core.error_taxonomy import (
    CHECK_VIOLATION, FOREIGN_KEY_VIOLATION, MULTIPLE_ROWS, NO_ROWS,
    NOT_NULL_VIOLATION, UNIQUE_VIOLATION,
)
from app.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# sqlite3 extended result codes
_SQLITE_CODES = {
    2067: UNIQUE_VIOLATION,       # SQLITE_CONSTRAINT_UNIQUE
    1555: UNIQUE_VIOLATION,       # SQLITE_CONSTRAINT_PRIMARYKEY
    787: FOREIGN_KEY_VIOLATION,   # SQLITE_CONSTRAINT_FOREIGNKEY
    1299: NOT_NULL_VIOLATION,     # SQLITE_CONSTRAINT_NOTNULL
    275: CHECK_VIOLATION,         # SQLITE_CONSTRAINT_CHECK
}

_SQLITE_MESSAGES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
    ("CHECK constraint failed", CHECK_VIOLATION),
)


class PersistenceError(Exception):
    """A store-level failure with the code the error taxonomy is keyed by."""

    def __init__(self, code: str | None, message: str, details: str | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"PersistenceError(code={self.code!r}, message={self.message!r})"


def extract_error_code(exc: BaseException) -> str | None:
    """Best-effort SQLSTATE for a SQLAlchemy exception."""
    if isinstance(exc, NoResultFound):
        return NO_ROWS
    if isinstance(exc, MultipleResultsFound):
        return MULTIPLE_ROWS
    orig = getattr(exc, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        for attr in ("sqlstate", "pgcode"):
            code = getattr(candidate, attr, None)
            if code:
                return str(code)
    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    if sqlite_code in _SQLITE_CODES:
        return _SQLITE_CODES[sqlite_code]
    text = str(orig if orig is not None else exc)
    for fragment, code in _SQLITE_MESSAGES:
        if fragment in text:
            return code
    return None


def to_persistence_error(exc: SQLAlchemyError) -> PersistenceError:
    if isinstance(exc, NoResultFound):
        return PersistenceError(NO_ROWS, "The result contains 0 rows", "0 rows returned")
    if isinstance(exc, MultipleResultsFound):
        return PersistenceError(MULTIPLE_ROWS, "The result contains multiple rows")
    message = str(exc.orig) if isinstance(exc, DBAPIError) else str(exc)
    return PersistenceError(extract_error_code(exc), message)


class RowStore:
    """Filtered select / insert / update / delete over one scoped session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fail(self, exc: SQLAlchemyError) -> PersistenceError:
        await self.session.rollback()
        error = to_persistence_error(exc)
        logger.warning(
            f"Persistence failure: {error.message}",
            extra={"error_code": error.code},
        )
        return error

    # --- reads ---------------------------------------------------------------

    async def fetch_all(self, stmt: Executable) -> list[Any]:
        try:
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def fetch_rows(self, stmt: Executable) -> list[Any]:
        """Multi-column selects (tuples rather than entities)."""
        try:
            result = await self.session.execute(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def fetch_optional(self, stmt: Executable) -> Any | None:
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def fetch_one(self, stmt: Executable) -> Any:
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one()
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def count(self, model: type[Base], *criteria) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        try:
            result = await self.session.execute(stmt)
            return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    # --- writes --------------------------------------------------------------

    async def insert(self, row: ModelT) -> ModelT:
        try:
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
            return row
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def insert_many(self, rows: Sequence[ModelT]) -> list[ModelT]:
        if not rows:
            return []
        try:
            self.session.add_all(rows)
            await self.session.commit()
            return list(rows)
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def update(
        self, model: type[ModelT], values: dict[str, Any], *criteria,
    ) -> ModelT:
        """Update exactly one row matching criteria and return it."""
        stmt = (
            update(model).where(*criteria).values(**values)
            .returning(model)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.scalar_one()
            await self.session.commit()
            return row
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def delete(self, model: type[Base], *criteria) -> int:
        stmt = delete(model).where(*criteria)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
            return result.rowcount or 0
        except SQLAlchemyError as e:
            raise await self._fail(e) from e

    async def execute(self, stmt: Executable) -> None:
        """Run one atomic server-side statement (counter bumps and the like)."""
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._fail(e) from e
