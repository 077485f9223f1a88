"""Request Dependencies: caller identity and request-scoped row stores.

Invariants:
    - Protected routes depend on get_current_caller: a missing or malformed bearer
      header is 401 before any service code runs
    - get_optional_caller returns None only when no Authorization header is sent;
      a header that is present but bad still fails
    - get_store builds a fresh credential-scoped session per request and never
      caches it; get_public_store is for anonymous reads and registration
    - get_identity_provider fails with 500 ServerMisconfigured, not at startup,
      when the provider URL or key is missing

Design Decisions:
    - db_manager is looked up through the module on every call, not imported by
      value, so startup initialization and test patching are both visible
"""

from typing import AsyncGenerator

from fastapi import Depends, Request

from app.config import get_settings
from app.core.domain_types import UserType
from app.core.errors import ForbiddenError, ServerMisconfiguredError
from app.core.identity import Caller, verify_bearer
from app.infrastructure import database
from app.infrastructure.identity_provider import IdentityProvider
from app.infrastructure.row_store import RowStore


def get_current_caller(request: Request) -> Caller:
    settings = get_settings()
    return verify_bearer(
        request.headers.get("authorization"),
        settings.supabase_jwt_secret,
        settings.jwt_audience,
    )


def get_optional_caller(request: Request) -> Caller | None:
    if request.headers.get("authorization") is None:
        return None
    return get_current_caller(request)


def require_user_type(*user_types: UserType):
    """Dependency factory: 403 unless the token's user_type is one of user_types."""
    allowed = {t.value for t in user_types}

    def _check(caller: Caller = Depends(get_current_caller)) -> Caller:
        if caller.claims.user_type not in allowed:
            raise ForbiddenError("Your account type cannot perform this action")
        return caller

    return _check


async def get_store(
    caller: Caller = Depends(get_current_caller),
) -> AsyncGenerator[RowStore, None]:
    async with database.get_manager().scoped_session(caller) as session:
        yield RowStore(session)


async def get_public_store() -> AsyncGenerator[RowStore, None]:
    async with database.get_manager().session() as session:
        yield RowStore(session)


async def get_optional_store(
    caller: Caller | None = Depends(get_optional_caller),
) -> AsyncGenerator[RowStore, None]:
    manager = database.get_manager()
    scope = manager.scoped_session(caller) if caller else manager.session()
    async with scope as session:
        yield RowStore(session)


def get_identity_provider() -> IdentityProvider:
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ServerMisconfiguredError("Registration is not configured on this server")
    return IdentityProvider(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.identity_provider_timeout_seconds,
    )
