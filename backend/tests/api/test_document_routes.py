"""Tests for /api/v1/documents."""

import uuid

from tests.factories import PROFILE_BODY, auth_headers

LICENSE = {
    "document_type": "license",
    "document_name": "PRC License.pdf",
    "file_url": "https://storage.example.com/docs/prc-license.pdf",
    "file_size": 204800,
    "mime_type": "application/pdf",
}


async def test_register_and_list(client, seeker_headers, seeker_subject, seeker_profile):
    created = await client.post("/api/v1/documents", json=LICENSE, headers=seeker_headers)
    assert created.status_code == 201
    document = created.json()["data"]
    assert document["is_verified"] is False
    assert document["user_id"] == seeker_subject
    assert document["job_seeker_id"] == seeker_profile["id"]

    listed = await client.get("/api/v1/documents", headers=seeker_headers)
    assert [d["id"] for d in listed.json()["data"]] == [document["id"]]


async def test_register_requires_profile(client, seeker_headers):
    response = await client.post("/api/v1/documents", json=LICENSE, headers=seeker_headers)
    assert response.status_code == 404


async def test_file_url_must_be_http(client, seeker_headers, seeker_profile):
    response = await client.post(
        "/api/v1/documents", json={**LICENSE, "file_url": "file:///etc/passwd"},
        headers=seeker_headers,
    )
    assert response.status_code == 400


async def test_update_and_delete(client, seeker_headers, seeker_profile):
    document = (await client.post(
        "/api/v1/documents", json=LICENSE, headers=seeker_headers,
    )).json()["data"]

    updated = await client.put(
        f"/api/v1/documents/{document['id']}", json={"notes": "Renewed 2024"},
        headers=seeker_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["notes"] == "Renewed 2024"

    deleted = await client.delete(f"/api/v1/documents/{document['id']}", headers=seeker_headers)
    assert deleted.status_code == 204
    assert deleted.content == b""


async def test_other_users_document_is_forbidden(client, seeker_headers, seeker_profile):
    document = (await client.post(
        "/api/v1/documents", json=LICENSE, headers=seeker_headers,
    )).json()["data"]
    other = auth_headers(str(uuid.uuid4()))
    await client.post("/api/v1/profile", json=PROFILE_BODY, headers=other)

    updated = await client.put(
        f"/api/v1/documents/{document['id']}", json={"notes": "mine now"}, headers=other,
    )
    assert updated.status_code == 403
    assert updated.json()["message"] == "You do not have permission to update this document"

    deleted = await client.delete(f"/api/v1/documents/{document['id']}", headers=other)
    assert deleted.status_code == 403
    assert (await client.get("/api/v1/documents", headers=other)).json()["data"] == []


async def test_unknown_document(client, seeker_headers, seeker_profile):
    response = await client.delete(f"/api/v1/documents/{uuid.uuid4()}", headers=seeker_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Document not found"
