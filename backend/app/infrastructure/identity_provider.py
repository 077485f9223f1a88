"""Identity Provider Client: account signup against the hosted auth service.

Invariants:
    - One short-lived httpx.AsyncClient per call, never shared across requests
    - Transport failures and non-2xx answers surface as IdentityProviderError,
      never as raw httpx exceptions
    - The signup answer is normalized: with email confirmation on the provider
      returns a bare user, otherwise a session wrapping the user

Design Decisions:
    - Signs up with the public (anon) key, exactly like a browser would, so the
      provider's own signup rules (confirmation mail, password policy) still apply
    - transport is injectable: tests hand in httpx.MockTransport instead of
      patching the module
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

SIGNUP_PATH = "/auth/v1/signup"


class IdentityProviderError(Exception):
    """The provider refused the request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


@dataclass(frozen=True)
class SignupResult:
    user_id: str
    email: str
    session: dict[str, Any] | None


def _error_message(payload: dict[str, Any]) -> str:
    for key in ("msg", "message", "error_description", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return "Registration failed"


class IdentityProvider:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any],
    ) -> SignupResult:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self._timeout, transport=self._transport,
            ) as client:
                response = await client.post(
                    SIGNUP_PATH,
                    json={"email": email, "password": password, "data": metadata},
                    headers={
                        "apikey": self._api_key,
                        "Authorization": f"Bearer {self._api_key}",
                    },
                )
        except httpx.RequestError as exc:
            logger.error(f"Identity provider unreachable: {exc}")
            raise IdentityProviderError("Identity provider is unavailable") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.status_code >= 400:
            raise IdentityProviderError(
                _error_message(payload),
                status_code=response.status_code,
                code=payload.get("error_code"),
            )

        user = payload.get("user") if "access_token" in payload else payload
        if not isinstance(user, dict) or not user.get("id"):
            raise IdentityProviderError(
                "Registration failed to create auth user", status_code=response.status_code,
            )
        session = payload if "access_token" in payload else None
        return SignupResult(user_id=str(user["id"]), email=user.get("email") or email, session=session)
