"""Success envelope: {success: true, data, message?, correlationId}."""

from typing import Any

from app.infrastructure.correlation import get_correlation_id


def ok(data: Any = None, message: str | None = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    body.update(extra)
    body["correlationId"] = get_correlation_id()
    return body
