"""Database Session Manager: async connection pool, per-caller scoped sessions, health probe.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - scoped_session(caller) forwards the caller's verified claims and role to
      PostgreSQL at the start of EVERY transaction, so row-level security
      evaluates the original credential
    - Scoped sessions are created per request and never cached or shared
    - health_check() is a single one-row existence query under a hard timeout

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Claims applied in an after_begin listener with set_config(..., is_local=true):
      transaction-local settings cannot leak to the next pooled checkout
    - Non-PostgreSQL engines (SQLite in tests) skip claim forwarding: RLS is a
      PostgreSQL feature
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, select, text
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.core.identity import Caller
from app.models.user import User

logger = logging.getLogger(__name__)

_APPLY_CLAIMS_SQL = text(
    "SELECT set_config('request.jwt.claims', :claims, true), "
    "set_config('role', :role, true)"
)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def forwards_claims(self) -> bool:
        return self.engine.dialect.name == "postgresql"

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Service-scoped session (public reads, health probe)."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def scoped_session(
        self, caller: Caller,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Session whose every transaction runs as the calling user."""
        async with self.session() as session:
            if self.forwards_claims:
                _forward_claims(session, caller)
            yield session

    async def health_check(self, timeout: float = 5.0) -> bool:
        """One-row existence probe against the users table."""
        try:
            async with asyncio.timeout(timeout):
                async with self.session() as db:
                    await db.execute(select(User.id).limit(1))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


def _forward_claims(session: AsyncSession, caller: Caller) -> None:
    claims = json.dumps(caller.raw_claims or {"sub": caller.subject_id})
    role = caller.claims.role or "authenticated"

    @event.listens_for(session.sync_session, "after_begin")
    def _apply(sync_session, transaction, connection):
        connection.execute(_APPLY_CLAIMS_SQL, {"claims": claims, "role": role})


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


def get_manager() -> DatabaseSessionManager:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
