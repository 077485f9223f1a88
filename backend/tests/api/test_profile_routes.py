"""Tests for job-seeker and employer profile routes."""

import uuid

from tests.factories import EMPLOYER_BODY, PROFILE_BODY, auth_headers


async def test_no_profile_is_null_not_404(client, seeker_headers):
    response = await client.get("/api/v1/profile", headers=seeker_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["data"] is None
    assert body["message"] == "No profile found for this user"


async def test_create_profile(client, seeker_headers, seeker_subject):
    response = await client.post("/api/v1/profile", json=PROFILE_BODY, headers=seeker_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Profile created successfully"
    assert body["data"]["first_name"] == "John"
    assert body["data"]["user_id"] == seeker_subject


async def test_second_profile_is_conflict(client, seeker_headers, seeker_profile):
    response = await client.post("/api/v1/profile", json=PROFILE_BODY, headers=seeker_headers)
    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "CONFLICT"
    assert body["message"] == "Profile already exists for this user"


async def test_update_profile_changes_only_sent_fields(client, seeker_headers, seeker_profile):
    response = await client.put(
        "/api/v1/profile", json={"phone": "09171234567"}, headers=seeker_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["phone"] == "09171234567"
    assert data["first_name"] == "John"


async def test_update_without_profile_is_404(client, seeker_headers):
    response = await client.put(
        "/api/v1/profile", json={"bio": "ICU nurse"}, headers=seeker_headers,
    )
    assert response.status_code == 404


async def test_delete_profile(client, seeker_headers, seeker_profile):
    response = await client.delete("/api/v1/profile", headers=seeker_headers)
    assert response.status_code == 200
    after = await client.get("/api/v1/profile", headers=seeker_headers)
    assert after.json()["data"] is None


async def test_profile_by_user_id(client, seeker_headers, seeker_subject, seeker_profile):
    found = await client.get(f"/api/v1/profile/{seeker_subject}", headers=seeker_headers)
    assert found.status_code == 200
    assert found.json()["data"]["id"] == seeker_profile["id"]

    missing = await client.get(f"/api/v1/profile/{uuid.uuid4()}", headers=seeker_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Profile not found"


async def test_public_profile_includes_sections_and_counts_view(
    client, seeker_headers, seeker_profile,
):
    await client.post(
        "/api/v1/education",
        json={"degree": "BS Nursing", "school": "UP Manila", "year": "2018"},
        headers=seeker_headers,
    )
    viewer = auth_headers(str(uuid.uuid4()), "employer")
    response = await client.get(
        f"/api/v1/profile/job-seeker/{seeker_profile['id']}", headers=viewer,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert [entry["degree"] for entry in data["education"]] == ["BS Nursing"]
    assert data["experience"] == []
    assert data["certifications"] == []

    stats = await client.get("/api/v1/dashboard/job-seeker", headers=seeker_headers)
    assert stats.json()["data"]["profileViews"] == 1


async def test_own_public_profile_view_is_not_counted(client, seeker_headers, seeker_profile):
    await client.get(
        f"/api/v1/profile/job-seeker/{seeker_profile['id']}", headers=seeker_headers,
    )
    stats = await client.get("/api/v1/dashboard/job-seeker", headers=seeker_headers)
    assert stats.json()["data"]["profileViews"] == 0


async def test_unknown_public_profile_is_404(client, seeker_headers):
    response = await client.get(
        f"/api/v1/profile/job-seeker/{uuid.uuid4()}", headers=seeker_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Job seeker profile not found"


# --- employer profile ------------------------------------------------------

async def test_employer_profile_lifecycle(client, employer_headers, employer_subject):
    empty = await client.get("/api/v1/employer/profile", headers=employer_headers)
    assert empty.status_code == 200
    assert empty.json()["data"] is None

    created = await client.post(
        "/api/v1/employer/profile", json=EMPLOYER_BODY, headers=employer_headers,
    )
    assert created.status_code == 201
    assert created.json()["data"]["user_id"] == employer_subject

    duplicate = await client.post(
        "/api/v1/employer/profile", json=EMPLOYER_BODY, headers=employer_headers,
    )
    assert duplicate.status_code == 409

    updated = await client.put(
        "/api/v1/employer/profile", json={"city": "Makati"}, headers=employer_headers,
    )
    assert updated.json()["data"]["city"] == "Makati"
    assert updated.json()["data"]["facility_name"] == EMPLOYER_BODY["facility_name"]

    deleted = await client.delete("/api/v1/employer/profile", headers=employer_headers)
    assert deleted.status_code == 200


async def test_employer_profile_by_id(client, seeker_headers, employer_profile):
    response = await client.get(
        f"/api/v1/employer/profile/{employer_profile['id']}", headers=seeker_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["facility_name"] == EMPLOYER_BODY["facility_name"]


async def test_employer_phone_must_be_philippine(client, employer_headers):
    response = await client.post(
        "/api/v1/employer/profile",
        json={**EMPLOYER_BODY, "phone": "555-0100"},
        headers=employer_headers,
    )
    assert response.status_code == 400
    assert any(d["field"] == "phone" for d in response.json()["details"])
