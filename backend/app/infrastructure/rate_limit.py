"""Rate Limiting: per-IP request windows via slowapi.

Invariants:
    - Three independent windows keyed by client address: general (every route),
      auth and mutation (shared scopes, applied by decorator)
    - The general window is one counter per IP across the whole API: undecorated
      routes hit it through SlowAPIMiddleware, decorated routes through their
      own decorator, so auth and write calls count toward it too
    - Exceeding any window is 429 with code RATE_LIMITED and a message naming
      the window
    - Counters live in process memory and are the only cross-request mutable state

Design Decisions:
    - Windows read from settings at import: limits are static for the process
      lifetime (ADR: no runtime reconfiguration)
    - General window as an application limit (scope "global") rather than a
      default limit: slowapi scopes default limits per endpoint, and skips them
      in the middleware for any route carrying a decorator
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings

GENERAL_SCOPE = "global"

GENERAL_MESSAGE = "Too many requests, please try again later"
AUTH_MESSAGE = "Too many authentication attempts, please try again later"
MUTATION_MESSAGE = "Too many write operations, please try again later"

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[_settings.rate_limit_default],
    enabled=_settings.rate_limit_enabled,
)

_general_limit = limiter.shared_limit(
    _settings.rate_limit_default, scope=GENERAL_SCOPE, error_message=GENERAL_MESSAGE,
)


def _with_general_window(scoped_limit):
    """Stack a scoped window on top of the per-IP general window."""
    def decorate(func):
        return _general_limit(scoped_limit(func))
    return decorate


auth_limit = _with_general_window(
    limiter.shared_limit(_settings.rate_limit_auth, scope="auth", error_message=AUTH_MESSAGE),
)
mutation_limit = _with_general_window(
    limiter.shared_limit(
        _settings.rate_limit_mutation, scope="mutation", error_message=MUTATION_MESSAGE,
    ),
)
