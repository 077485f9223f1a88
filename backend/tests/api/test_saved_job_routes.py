"""Tests for /api/v1/saved-jobs."""

import uuid


async def test_save_and_list(client, seeker_headers, seeker_profile, active_job):
    saved = await client.post(
        "/api/v1/saved-jobs", json={"job_id": active_job["id"]}, headers=seeker_headers,
    )
    assert saved.status_code == 201
    assert saved.json()["message"] == "Job saved successfully"

    listed = await client.get("/api/v1/saved-jobs", headers=seeker_headers)
    assert [s["job_id"] for s in listed.json()["data"]] == [active_job["id"]]

    count = await client.get("/api/v1/saved-jobs/count", headers=seeker_headers)
    assert count.json()["data"] == {"count": 1}

    check = await client.get(
        f"/api/v1/saved-jobs/check/{active_job['id']}", headers=seeker_headers,
    )
    assert check.json()["data"] == {"isSaved": True}


async def test_details_include_job_summary(client, seeker_headers, seeker_profile, active_job):
    await client.post(
        "/api/v1/saved-jobs", json={"job_id": active_job["id"]}, headers=seeker_headers,
    )
    response = await client.get("/api/v1/saved-jobs/details", headers=seeker_headers)
    [item] = response.json()["data"]
    assert item["job"]["title"] == "ICU Staff Nurse"
    assert len(item["job"]["requirements"]) == 2
    assert item["job"]["employers"]["facility_name"] == "St. Luke's Medical Center"


async def test_save_twice_is_conflict(client, seeker_headers, seeker_profile, active_job):
    body = {"job_id": active_job["id"]}
    await client.post("/api/v1/saved-jobs", json=body, headers=seeker_headers)
    response = await client.post("/api/v1/saved-jobs", json=body, headers=seeker_headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Job is already saved"


async def test_save_unknown_job(client, seeker_headers, seeker_profile):
    response = await client.post(
        "/api/v1/saved-jobs", json={"job_id": str(uuid.uuid4())}, headers=seeker_headers,
    )
    assert response.status_code == 404


async def test_unsave(client, seeker_headers, seeker_profile, active_job):
    await client.post(
        "/api/v1/saved-jobs", json={"job_id": active_job["id"]}, headers=seeker_headers,
    )
    response = await client.delete(
        f"/api/v1/saved-jobs/{active_job['id']}", headers=seeker_headers,
    )
    assert response.status_code == 200
    check = await client.get(
        f"/api/v1/saved-jobs/check/{active_job['id']}", headers=seeker_headers,
    )
    assert check.json()["data"] == {"isSaved": False}


async def test_unsave_is_idempotent(client, seeker_headers, seeker_profile):
    response = await client.delete(
        f"/api/v1/saved-jobs/{uuid.uuid4()}", headers=seeker_headers,
    )
    assert response.status_code == 200


async def test_saved_jobs_need_profile(client, seeker_headers):
    response = await client.get("/api/v1/saved-jobs", headers=seeker_headers)
    assert response.status_code == 404
