"""Job Seeker Profile Schemas: create and partial update of job_seekers rows.

Invariants:
    - first_name, last_name, profession, location required on create
    - phone must be a Philippine number: optional +63 or 0 prefix, 10-11 digits
    - expected_salary positive and at most 10,000,000
"""

from pydantic import Field

from app.core.domain_types import Availability, ExperienceLevel
from app.schemas.common import PHONE_PATTERN, RequestModel


class ProfileCreate(RequestModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    profession: str = Field(min_length=2, max_length=100)
    location: str = Field(min_length=2, max_length=200)
    experience: ExperienceLevel | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    bio: str | None = Field(None, max_length=2000)
    availability: Availability | None = None
    expected_salary: float | None = Field(None, gt=0, le=10_000_000)


class ProfileUpdate(RequestModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    profession: str | None = Field(None, min_length=2, max_length=100)
    location: str | None = Field(None, min_length=2, max_length=200)
    experience: ExperienceLevel | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    bio: str | None = Field(None, max_length=2000)
    availability: Availability | None = None
    expected_salary: float | None = Field(None, gt=0, le=10_000_000)
