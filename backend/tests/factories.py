"""Test factories: signed bearer tokens and valid request bodies."""

import os
import time
import uuid

from jose import jwt

TEST_SECRET = os.environ.get("SUPABASE_JWT_SECRET", "test-jwt-secret")


def make_token(
    subject: str | None = None,
    *,
    user_type: str = "job_seeker",
    email: str = "user@example.com",
    expires_in: int = 3600,
    secret: str = TEST_SECRET,
) -> str:
    now = int(time.time())
    claims = {
        "sub": subject or str(uuid.uuid4()),
        "email": email,
        "role": "authenticated",
        "user_metadata": {"user_type": user_type},
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(subject: str, user_type: str = "job_seeker") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(subject, user_type=user_type)}"}


PROFILE_BODY = {
    "first_name": "John",
    "last_name": "Doe",
    "profession": "Nurse",
    "location": "Manila",
}

EMPLOYER_BODY = {
    "facility_name": "St. Luke's Medical Center",
    "phone": "09171234567",
    "address": "279 E Rodriguez Sr. Ave",
    "city": "Quezon City",
    "facility_type": "Hospital",
    "contact_person": "Maria Santos",
}


def job_body(**overrides) -> dict:
    body = {
        "title": "ICU Staff Nurse",
        "location": "Manila",
        "employment_type": "full-time",
        "category": "Nursing",
        "experience": "mid-level",
        "facility_type": "Hospital",
        "description": "Provide critical care nursing to ICU patients.",
        "status": "active",
        "requirements": ["PRC license", "BLS certification"],
        "benefits": ["HMO"],
        "tags": ["icu"],
    }
    body.update(overrides)
    return body
