"""Tests for /api/health liveness and readiness checks."""


async def test_liveness(client):
    response = await client.get("/api/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness(client):
    response = await client.get("/api/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


async def test_full_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"] == {"database": "ok"}
    assert body["responseTime"].endswith("ms")
    assert body["version"]


async def test_failing_database_check_is_503(client, fake_manager, monkeypatch):
    async def unreachable(timeout=5.0):
        return False

    monkeypatch.setattr(fake_manager, "health_check", unreachable)

    ready = await client.get("/api/health/ready")
    assert ready.status_code == 503
    assert ready.json()["reason"] == "Database connection failed"

    full = await client.get("/api/health")
    assert full.status_code == 503
    assert full.json()["status"] == "unhealthy"
    assert full.json()["checks"] == {"database": "error"}

    assert (await client.get("/api/health/live")).status_code == 200
