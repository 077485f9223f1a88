"""Tests for POST /api/v1/auth/register against a mocked identity provider."""

import json
import uuid

import httpx
import pytest

from app.api.dependencies import get_identity_provider
from app.core.errors import DatabaseError
from app.infrastructure.identity_provider import SIGNUP_PATH, IdentityProvider
from app.main import app
from app.services import registration
from tests.factories import auth_headers

SEEKER = {
    "user_type": "job_seeker",
    "email": "  Maria.Cruz@Example.com ",
    "password": "Str0ngPass",
    "name": "Maria Cruz",
    "profession": "Nurse",
    "location": "Manila",
}

EMPLOYER = {
    "user_type": "employer",
    "email": "hr@stlukes.example.com",
    "password": "Str0ngPass",
    "name": "Ana Reyes",
    "facility_name": "St. Luke's Medical Center",
    "facility_type": "Hospital",
    "phone": "09171234567",
    "address": "279 E Rodriguez Sr. Ave",
    "city": "Quezon City",
}


class FakeProvider:
    """Answers signup like the hosted provider with email confirmation on."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.reply: httpx.Response | None = None
        self.user_id = str(uuid.uuid4())

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.reply is not None:
            return self.reply
        sent = json.loads(request.content)
        return httpx.Response(
            200, json={"id": self.user_id, "email": sent["email"], "user_metadata": sent["data"]},
        )


@pytest.fixture
def provider():
    fake = FakeProvider()
    app.dependency_overrides[get_identity_provider] = lambda: IdentityProvider(
        "https://auth.test", "anon-key", transport=httpx.MockTransport(fake),
    )
    yield fake
    app.dependency_overrides.pop(get_identity_provider, None)


async def test_register_job_seeker(client, provider):
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 201
    body = response.json()
    assert body["message"].startswith("Registration successful")
    assert body["data"]["user"] == {
        "id": provider.user_id,
        "email": "maria.cruz@example.com",
        "name": "Maria Cruz",
        "user_type": "job_seeker",
    }
    assert body["data"]["session"] is None

    [sent] = provider.requests
    assert sent.url.path == SIGNUP_PATH
    assert sent.headers["apikey"] == "anon-key"
    assert json.loads(sent.content) == {
        "email": "maria.cruz@example.com",
        "password": "Str0ngPass",
        "data": {"name": "Maria Cruz", "user_type": "job_seeker"},
    }

    profile = await client.get("/api/v1/profile", headers=auth_headers(provider.user_id))
    data = profile.json()["data"]
    assert data["first_name"] == "Maria"
    assert data["last_name"] == "Cruz"
    assert data["experience"] == "entry-level"


async def test_register_employer(client, provider):
    response = await client.post("/api/v1/auth/register", json=EMPLOYER)
    assert response.status_code == 201

    profile = await client.get(
        "/api/v1/employer/profile", headers=auth_headers(provider.user_id, "employer"),
    )
    assert profile.json()["data"]["contact_person"] == "Ana Reyes"
    assert profile.json()["data"]["facility_name"] == "St. Luke's Medical Center"


async def test_registered_email_reaches_employer_views(client, provider,
                                                       employer_headers, active_job):
    await client.post("/api/v1/auth/register", json=SEEKER)
    seeker_headers = auth_headers(provider.user_id)
    applied = await client.post(
        "/api/v1/applications", json={"job_id": active_job["id"]}, headers=seeker_headers,
    )
    assert applied.status_code == 201

    response = await client.get("/api/v1/applications/employer/me", headers=employer_headers)
    [item] = response.json()["data"]
    assert item["job_seeker_email"] == "maria.cruz@example.com"
    assert item["job_seeker_name"] == "Maria Cruz"


async def test_session_returned_when_provider_auto_confirms(client, provider):
    provider.reply = httpx.Response(200, json={
        "access_token": "provider-access-token",
        "token_type": "bearer",
        "expires_in": 3600,
        "refresh_token": "provider-refresh-token",
        "user": {"id": provider.user_id, "email": "maria.cruz@example.com"},
    })
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 201
    assert response.json()["data"]["session"]["access_token"] == "provider-access-token"


async def test_single_word_name_fills_both_fields(client, provider):
    await client.post("/api/v1/auth/register", json={**SEEKER, "name": "Madonna"})
    profile = await client.get("/api/v1/profile", headers=auth_headers(provider.user_id))
    assert profile.json()["data"]["first_name"] == "Madonna"
    assert profile.json()["data"]["last_name"] == "Madonna"


async def test_existing_account_is_conflict(client, provider):
    provider.reply = httpx.Response(422, json={
        "code": 422, "error_code": "user_already_exists", "msg": "User already registered",
    })
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 409
    assert response.json()["message"] == "An account with this email already exists"


async def test_other_provider_refusal_is_bad_request(client, provider):
    provider.reply = httpx.Response(400, json={"msg": "Signups not allowed for this instance"})
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 400
    assert response.json()["message"] == "Signups not allowed for this instance"


async def test_unreachable_provider(client):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    app.dependency_overrides[get_identity_provider] = lambda: IdentityProvider(
        "https://auth.test", "anon-key", transport=httpx.MockTransport(refuse),
    )
    try:
        response = await client.post("/api/v1/auth/register", json=SEEKER)
    finally:
        app.dependency_overrides.pop(get_identity_provider, None)
    assert response.status_code == 500
    assert response.json()["message"] == "Identity provider is unavailable"


@pytest.mark.parametrize("override", [
    {"password": "alllowercase1"},
    {"password": "Short1"},
    {"email": "not-an-email"},
    {"name": "M"},
    {"user_type": "admin"},
    {"location": ""},
])
async def test_invalid_registration_never_reaches_provider(client, provider, override):
    response = await client.post("/api/v1/auth/register", json={**SEEKER, **override})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert provider.requests == []


async def test_employer_fields_required(client, provider):
    body = {key: value for key, value in EMPLOYER.items() if key != "facility_name"}
    response = await client.post("/api/v1/auth/register", json=body)
    assert response.status_code == 400
    assert provider.requests == []


async def test_profile_failure_does_not_fail_registration(client, provider, monkeypatch):
    async def failing_create(store, subject_id, body):
        raise DatabaseError("Database operation failed")

    monkeypatch.setattr(registration.profile_service, "create", failing_create)
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 201

    profile = await client.get("/api/v1/profile", headers=auth_headers(provider.user_id))
    assert profile.json()["data"] is None


async def test_registration_without_provider_config(client):
    response = await client.post("/api/v1/auth/register", json=SEEKER)
    assert response.status_code == 500
    assert response.json()["error"] == "Server Configuration Error"
    assert response.json()["message"] == "Registration is not configured on this server"
