"""Tests for behaviour every route shares: correlation ids, envelopes, fallbacks."""

import uuid

from app.config import get_settings
from app.infrastructure.rate_limit import limiter
from app.infrastructure.security_headers import SECURITY_HEADERS
from app.services import dashboard as dashboard_service
from tests.factories import PROFILE_BODY


async def test_inbound_correlation_id_is_echoed(client):
    response = await client.get(
        "/api/health/live", headers={"X-Correlation-ID": "trace-123"},
    )
    assert response.headers["X-Correlation-ID"] == "trace-123"


async def test_correlation_id_generated_and_put_in_envelope(client, seeker_headers):
    response = await client.get("/api/v1/dashboard/job-seeker", headers=seeker_headers)
    header = response.headers["X-Correlation-ID"]
    assert uuid.UUID(header)
    assert response.json()["correlationId"] == header


async def test_failure_envelope_carries_inbound_correlation_id(client):
    response = await client.get(
        "/api/v1/auth/me", headers={"X-Correlation-ID": "trace-401"},
    )
    assert response.status_code == 401
    assert response.json()["correlationId"] == "trace-401"
    assert response.headers["X-Correlation-ID"] == "trace-401"


async def test_unknown_route_is_404_envelope(client):
    response = await client.get("/api/v1/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"
    assert body["message"] == "Route GET /api/v1/nowhere not found"


async def test_validation_errors_list_fields(client, seeker_headers):
    response = await client.post(
        "/api/v1/profile", json={"first_name": "John"}, headers=seeker_headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"] == "Invalid request data"
    fields = {detail["field"] for detail in body["details"]}
    assert {"last_name", "profession", "location"} <= fields


async def test_malformed_path_id_is_400(client, seeker_headers):
    response = await client.get("/api/v1/applications/not-a-uuid", headers=seeker_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_unexpected_failure_shows_message_outside_production(
    client, seeker_headers, monkeypatch,
):
    async def explode(store, subject_id):
        raise RuntimeError("dashboard exploded")

    monkeypatch.setattr(dashboard_service, "job_seeker_stats", explode)
    response = await client.get("/api/v1/dashboard/job-seeker", headers=seeker_headers)
    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert body["message"] == "dashboard exploded"
    assert any("RuntimeError: dashboard exploded" in line for line in body["stack"])
    assert response.headers["X-Correlation-ID"] == body["correlationId"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


async def test_unexpected_failure_is_generic_in_production(
    client, seeker_headers, monkeypatch,
):
    async def explode(store, subject_id):
        raise RuntimeError("connection string leaked")

    production = get_settings().model_copy(update={"app_env": "production"})
    monkeypatch.setattr("app.api.error_handlers.get_settings", lambda: production)
    monkeypatch.setattr(dashboard_service, "job_seeker_stats", explode)
    response = await client.get("/api/v1/dashboard/job-seeker", headers=seeker_headers)
    assert response.status_code == 500
    assert response.json()["message"] == "An unexpected error occurred"
    assert "stack" not in response.json()


async def test_auth_window_returns_429(client, seeker_headers):
    limiter.enabled = True
    statuses = [
        (await client.get("/api/v1/auth/me", headers=seeker_headers)).status_code
        for _ in range(11)
    ]
    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429


async def test_rate_limited_envelope(client, seeker_headers):
    limiter.enabled = True
    for _ in range(10):
        await client.get("/api/v1/auth/me", headers=seeker_headers)
    response = await client.get(
        "/api/v1/auth/me", headers={**seeker_headers, "X-Correlation-ID": "trace-429"},
    )
    assert response.status_code == 429
    body = response.json()
    assert body["code"] == "RATE_LIMITED"
    assert body["error"] == "TooManyRequests"
    assert body["correlationId"] == "trace-429"
    assert body["message"] == "Too many authentication attempts, please try again later"


async def test_reads_are_idempotent(client, seeker_headers, seeker_profile):
    first = await client.get("/api/v1/profile", headers=seeker_headers)
    second = await client.get("/api/v1/profile", headers=seeker_headers)
    assert first.json()["data"] == second.json()["data"]


async def test_mutation_window_names_writes(client, seeker_headers):
    limiter.enabled = True
    statuses = {
        (await client.post("/api/v1/profile", json=PROFILE_BODY, headers=seeker_headers)).status_code
        for _ in range(30)
    }
    assert statuses == {201, 409}
    response = await client.post("/api/v1/profile", json=PROFILE_BODY, headers=seeker_headers)
    assert response.status_code == 429
    assert response.json()["message"] == "Too many write operations, please try again later"


async def test_decorated_routes_count_toward_general_window(client, seeker_headers):
    limiter.enabled = True
    for _ in range(91):
        assert (await client.get("/api/v1/jobs")).status_code == 200
    for _ in range(9):
        assert (await client.get("/api/v1/auth/me", headers=seeker_headers)).status_code == 200

    response = await client.get("/api/v1/auth/me", headers=seeker_headers)
    assert response.status_code == 429
    assert response.json()["message"] == "Too many requests, please try again later"

    public = await client.get("/api/v1/jobs")
    assert public.status_code == 429


async def test_security_headers_on_success(client):
    response = await client.get("/api/health/live")
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value
    assert response.headers["Content-Security-Policy"] == "default-src 'none'; frame-ancestors 'none'"


async def test_security_headers_on_rejections(client, seeker_headers):
    unauthenticated = await client.get("/api/v1/auth/me")
    missing = await client.get("/api/v1/nowhere")
    invalid = await client.post("/api/v1/profile", json={}, headers=seeker_headers)
    for response in (unauthenticated, missing, invalid):
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Strict-Transport-Security"].startswith("max-age=")


async def test_docs_page_skips_content_security_policy(client):
    response = await client.get("/docs")
    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "Content-Security-Policy" not in response.headers
