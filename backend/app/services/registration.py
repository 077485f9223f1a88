"""Registration Service: create the account, its users row and its owner profile.

Invariants:
    - Order is fixed: provider signup, then the users row, then the owner profile
    - A provider refusal is surfaced as 409 (address taken) or 400 (anything else
      the provider rejected); an unreachable provider is 500
    - A failed users row is fatal (500): without it the account has no public mirror
    - The owner profile is Tier 3: failures are logged and the caller can still
      create it through POST /profile or /employer/profile after signing in

Design Decisions:
    - Writes go through the unscoped store: there is no caller credential yet,
      the account is minutes old (ADR: registration is a system-level operation)
    - Names split on the first space; a single-word name fills both fields
"""

import logging
from typing import Any

from app.core.domain_types import ExperienceLevel, UserType
from app.core.errors import AppError, BadRequestError, ConflictError, InternalServerError
from app.infrastructure.identity_provider import IdentityProvider, IdentityProviderError
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.user import User
from app.schemas.auth import EmployerRegistration, JobSeekerRegistration
from app.schemas.employer import EmployerCreate
from app.schemas.profile import ProfileCreate
from app.services import employer as employer_service
from app.services import profile as profile_service
from app.services.ownership import subject_uuid

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "Registration successful. Please check your email to confirm your account."


def split_name(name: str) -> tuple[str, str]:
    parts = name.split()
    first = parts[0] if parts else name
    last = " ".join(parts[1:]) or name
    return first, last


def _provider_failure(exc: IdentityProviderError) -> AppError:
    if exc.code == "user_already_exists" or "already registered" in exc.message.lower():
        return ConflictError("An account with this email already exists")
    if exc.status_code is not None and 400 <= exc.status_code < 500:
        return BadRequestError(exc.message)
    return InternalServerError(exc.message)


async def _create_owner_profile(
    store: RowStore, user_id: str, body: JobSeekerRegistration | EmployerRegistration,
) -> None:
    """Tier 3: a missing profile is recoverable, a missing account is not."""
    try:
        if body.user_type == UserType.EMPLOYER.value:
            await employer_service.create(store, user_id, EmployerCreate(
                facility_name=body.facility_name,
                facility_type=body.facility_type,
                contact_person=body.name,
                phone=body.phone,
                address=body.address,
                city=body.city,
            ))
        else:
            first_name, last_name = split_name(body.name)
            await profile_service.create(store, user_id, ProfileCreate(
                first_name=first_name,
                last_name=last_name,
                profession=body.profession,
                location=body.location,
                experience=body.experience or ExperienceLevel.ENTRY.value,
                phone=body.phone,
            ))
    except AppError as exc:
        logger.warning(
            f"Owner profile not created at registration: {exc.message}",
            extra={"user_id": user_id, "error_code": exc.code},
        )


async def register(
    store: RowStore,
    provider: IdentityProvider,
    body: JobSeekerRegistration | EmployerRegistration,
) -> dict[str, Any]:
    try:
        account = await provider.sign_up(
            body.email, body.password, {"name": body.name, "user_type": body.user_type},
        )
    except IdentityProviderError as exc:
        logger.warning(
            f"Signup refused: {exc.message}",
            extra={"status_code": exc.status_code, "error_code": exc.code},
        )
        raise _provider_failure(exc) from exc

    try:
        await store.insert(User(
            id=subject_uuid(account.user_id),
            email=body.email,
            name=body.name,
            user_type=body.user_type,
        ))
    except PersistenceError as exc:
        logger.error(
            f"Failed to create users row: {exc.message}",
            extra={"user_id": account.user_id, "error_code": exc.code},
        )
        raise InternalServerError("Failed to create user profile record") from exc

    await _create_owner_profile(store, account.user_id, body)
    logger.info(f"Registered {body.user_type} account", extra={"user_id": account.user_id})
    return {
        "user": {
            "id": account.user_id,
            "email": body.email,
            "name": body.name,
            "user_type": body.user_type,
        },
        "session": account.session,
    }
