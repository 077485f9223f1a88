"""Root conftest: shared test configuration, database and authenticated client.

Invariants:
    - Env defaults are set before any app import: settings are cached per process
    - Every test gets a fresh in-memory SQLite database with all tables
    - db_manager is patched with a manager bound to the test engine
    - The rate limiter is off unless a test switches it on

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL claim forwarding is skipped on non-PostgreSQL engines)
    - Tokens are minted with python-jose and the test secret, exactly as the
      hosted auth provider would sign them
"""

import os
import uuid

os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.infrastructure.database as db_module
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.rate_limit import limiter
from app.main import app
from tests.factories import EMPLOYER_BODY, PROFILE_BODY, auth_headers, job_body


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_manager(test_engine, test_session_factory):
    """db_manager bound to the test engine, restored afterwards."""
    original_manager = db_module.db_manager
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    db_module.db_manager = manager
    yield manager
    db_module.db_manager = original_manager


@pytest.fixture(autouse=True)
def rate_limiter_off():
    limiter.enabled = False
    yield
    limiter.enabled = False
    limiter.reset()


@pytest.fixture
async def client(fake_manager):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def seeker_subject() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def employer_subject() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def seeker_headers(seeker_subject) -> dict[str, str]:
    return auth_headers(seeker_subject, "job_seeker")


@pytest.fixture
def employer_headers(employer_subject) -> dict[str, str]:
    return auth_headers(employer_subject, "employer")


@pytest.fixture
async def seeker_profile(client, seeker_headers) -> dict:
    response = await client.post("/api/v1/profile", json=PROFILE_BODY, headers=seeker_headers)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def employer_profile(client, employer_headers) -> dict:
    response = await client.post(
        "/api/v1/employer/profile", json=EMPLOYER_BODY, headers=employer_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def active_job(client, employer_headers, employer_profile) -> dict:
    response = await client.post("/api/v1/jobs", json=job_body(), headers=employer_headers)
    assert response.status_code == 201
    return response.json()["data"]
