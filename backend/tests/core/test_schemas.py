"""Tests for request body validation rules."""

from datetime import date

import pytest
from pydantic import ValidationError

from app.schemas.job import JobCreate, JobUpdate
from app.schemas.profile import ProfileCreate
from app.schemas.profile_sections import ExperienceCreate
from tests.factories import PROFILE_BODY, job_body


def test_profile_strips_and_blanks_to_none():
    body = ProfileCreate(**{**PROFILE_BODY, "first_name": "  John ", "bio": "   "})
    assert body.first_name == "John"
    assert body.bio is None


@pytest.mark.parametrize("phone", ["09171234567", "+639171234567", "9171234567"])
def test_profile_accepts_philippine_phones(phone):
    assert ProfileCreate(**PROFILE_BODY, phone=phone).phone == phone


@pytest.mark.parametrize("phone", ["12345", "+1 555 123 4567", "0917-123-4567"])
def test_profile_rejects_other_phones(phone):
    with pytest.raises(ValidationError):
        ProfileCreate(**PROFILE_BODY, phone=phone)


def test_job_salary_range():
    with pytest.raises(ValidationError):
        JobCreate(**job_body(salary_min=50000, salary_max=30000))
    assert JobCreate(**job_body(salary_min=30000, salary_max=50000)).salary_max == 50000


def test_job_defaults_to_pending():
    body = job_body()
    del body["status"]
    assert JobCreate(**body).status == "pending"


def test_job_tag_cap():
    with pytest.raises(ValidationError):
        JobCreate(**job_body(tags=[f"t{i}" for i in range(11)]))


def test_job_update_tracks_sent_fields_only():
    changes = JobUpdate(title="Charge Nurse").changes()
    assert changes == {"title": "Charge Nurse"}


def test_experience_accepts_month_dates():
    body = ExperienceCreate(position="Staff Nurse", facility="PGH", start_date="2021-06")
    assert body.start_date == date(2021, 6, 1)
    assert body.end_date is None
