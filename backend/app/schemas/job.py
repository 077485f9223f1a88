"""Job Posting Schemas: create/update bodies and public listing filters.

Invariants:
    - salary_min <= salary_max whenever both are present
    - At most 20 requirements, 20 benefits, 10 tags
    - New postings default to status "pending"; listing shows only "active"
    - Listing: page >= 1, 1 <= limit <= 100 (default 20)

Design Decisions:
    - requirements/benefits/tags left as None on update when omitted, so the
      service can tell "replace with empty" from "leave alone"
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, ValidationInfo, field_validator

from app.core.domain_types import (
    EmploymentType, ExperienceLevel, JobStatus,
    MAX_JOB_BENEFITS, MAX_JOB_REQUIREMENTS, MAX_JOB_TAGS,
)
from app.schemas.common import RequestModel

LineItem = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]

SALARY_CEILING = 100_000_000


def _check_salary_range(salary_max: float | None, info: ValidationInfo) -> float | None:
    salary_min = info.data.get("salary_min")
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError("Minimum salary cannot exceed maximum salary")
    return salary_max


class JobCreate(RequestModel):
    title: str = Field(min_length=2, max_length=200)
    department: str | None = Field(None, max_length=100)
    location: str = Field(min_length=2, max_length=200)
    employment_type: EmploymentType
    category: str = Field(min_length=2, max_length=100)
    experience: ExperienceLevel
    salary_min: float | None = Field(None, gt=0, le=SALARY_CEILING)
    salary_max: float | None = Field(None, gt=0, le=SALARY_CEILING)
    salary_display: str | None = Field(None, max_length=100)
    facility_type: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=10, max_length=10_000)
    status: JobStatus = JobStatus.PENDING
    is_urgent: bool = False
    rank: int = Field(0, ge=0, le=100)
    spend_limit: float | None = Field(None, gt=0)
    expiry_date: datetime | None = None
    deadline: datetime | None = None
    requirements: list[LineItem] = Field(default_factory=list, max_length=MAX_JOB_REQUIREMENTS)
    benefits: list[LineItem] = Field(default_factory=list, max_length=MAX_JOB_BENEFITS)
    tags: list[Tag] = Field(default_factory=list, max_length=MAX_JOB_TAGS)

    @field_validator("salary_max")
    @classmethod
    def check_salary_range(cls, v: float | None, info: ValidationInfo) -> float | None:
        return _check_salary_range(v, info)


class JobUpdate(RequestModel):
    title: str | None = Field(None, min_length=2, max_length=200)
    department: str | None = Field(None, max_length=100)
    location: str | None = Field(None, min_length=2, max_length=200)
    employment_type: EmploymentType | None = None
    category: str | None = Field(None, min_length=2, max_length=100)
    experience: ExperienceLevel | None = None
    salary_min: float | None = Field(None, gt=0, le=SALARY_CEILING)
    salary_max: float | None = Field(None, gt=0, le=SALARY_CEILING)
    salary_display: str | None = Field(None, max_length=100)
    facility_type: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=10, max_length=10_000)
    status: JobStatus | None = None
    is_urgent: bool | None = None
    rank: int | None = Field(None, ge=0, le=100)
    spend_limit: float | None = Field(None, gt=0)
    expiry_date: datetime | None = None
    deadline: datetime | None = None
    requirements: list[LineItem] | None = Field(None, max_length=MAX_JOB_REQUIREMENTS)
    benefits: list[LineItem] | None = Field(None, max_length=MAX_JOB_BENEFITS)
    tags: list[Tag] | None = Field(None, max_length=MAX_JOB_TAGS)

    @field_validator("salary_max")
    @classmethod
    def check_salary_range(cls, v: float | None, info: ValidationInfo) -> float | None:
        return _check_salary_range(v, info)


class JobFilters(BaseModel):
    """Public listing query parameters."""
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)
    search: str | None = None
    category: str | None = None
    location: str | None = None
    employment_type: str | None = None
    experience: str | None = None
    facility_type: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
