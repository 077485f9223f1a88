"""Auth routes: account registration and who is calling."""

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_current_caller, get_identity_provider, get_public_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.identity_provider import IdentityProvider
from app.infrastructure.rate_limit import auth_limit
from app.infrastructure.row_store import RowStore
from app.schemas.auth import Registration
from app.services import registration as registration_service

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
@auth_limit
async def register(
    request: Request,
    body: Registration,
    provider: IdentityProvider = Depends(get_identity_provider),
    store: RowStore = Depends(get_public_store),
):
    account = await registration_service.register(store, provider, body)
    return ok(account, registration_service.REGISTERED_MESSAGE)


@router.get("/me")
@auth_limit
async def me(request: Request, caller: Caller = Depends(get_current_caller)):
    return ok({"user": caller.claims.to_dict()})
