"""Identity Token Verifier: bearer header to verified Claims, no network calls.

Invariants:
    - No header is UNAUTHORIZED; a header not exactly "Bearer <token>" is INVALID_TOKEN
    - Expired signatures raise TokenExpiredError, every other failure InvalidTokenError
    - A missing shared secret raises ServerMisconfiguredError, never a silent bypass
    - Caller keeps the raw token: it is forwarded verbatim to the database so
      row-level security evaluates the original credential

Design Decisions:
    - HS256 only: tokens are minted by the hosted auth provider with the shared
      project secret (ADR: no algorithm negotiation from the token header)
    - ExpiredSignatureError is caught before JWTError because it subclasses it
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.errors import (
    InvalidTokenError, ServerMisconfiguredError, TokenExpiredError,
    UnauthorizedError,
)

JWT_ALGORITHMS = ["HS256"]


@dataclass(frozen=True)
class Claims:
    """Caller identity reconstructed from a verified token. Never persisted."""
    subject_id: str
    email: str | None = None
    role: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    @property
    def user_type(self) -> str | None:
        return self.user_metadata.get("user_type")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.subject_id,
            "email": self.email,
            "role": self.role,
            "user_metadata": self.user_metadata,
            "iat": int(self.issued_at.timestamp()) if self.issued_at else None,
            "exp": int(self.expires_at.timestamp()) if self.expires_at else None,
        }


@dataclass(frozen=True)
class Caller:
    """Verified claims plus the raw credential they came from."""
    claims: Claims
    access_token: str
    raw_claims: dict[str, Any] = field(default_factory=dict)

    @property
    def subject_id(self) -> str:
        return self.claims.subject_id


def extract_bearer_token(header: str | None) -> str:
    """Return the token part of an Authorization header."""
    if not header:
        raise UnauthorizedError("No authorization header provided")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise InvalidTokenError("Invalid authorization header format")
    return parts[1]


def _timestamp(value: Any) -> datetime | None:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return None


def decode_token(
    token: str, secret: str | None, audience: str | None = None,
) -> dict[str, Any]:
    """Verify signature and expiry, returning the raw claim set."""
    if not secret:
        raise ServerMisconfiguredError()
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=JWT_ALGORITHMS,
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()


def claims_from_payload(payload: dict[str, Any]) -> Claims:
    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Token has no subject")
    metadata = payload.get("user_metadata")
    return Claims(
        subject_id=str(subject),
        email=payload.get("email"),
        role=payload.get("role"),
        user_metadata=metadata if isinstance(metadata, dict) else {},
        issued_at=_timestamp(payload.get("iat")),
        expires_at=_timestamp(payload.get("exp")),
    )


def verify_bearer(
    header: str | None, secret: str | None, audience: str | None = None,
) -> Caller:
    """Verify an Authorization header and build the Caller."""
    token = extract_bearer_token(header)
    payload = decode_token(token, secret, audience)
    return Caller(
        claims=claims_from_payload(payload),
        access_token=token,
        raw_claims=payload,
    )
