"""Profile Section Schemas: education, work experience, certifications.

Invariants:
    - Dates accept YYYY-MM or YYYY-MM-DD
    - Experience duration is optional: derived from the dates when omitted
"""

from datetime import date

from pydantic import Field, field_validator

from app.schemas.common import RequestModel, parse_partial_date


class EducationCreate(RequestModel):
    degree: str = Field(min_length=2, max_length=200)
    school: str = Field(min_length=2, max_length=200)
    year: str = Field(min_length=4, max_length=20)
    honors: str | None = Field(None, max_length=200)


class EducationUpdate(RequestModel):
    degree: str | None = Field(None, min_length=2, max_length=200)
    school: str | None = Field(None, min_length=2, max_length=200)
    year: str | None = Field(None, min_length=4, max_length=20)
    honors: str | None = Field(None, max_length=200)


class _DatedSection(RequestModel):
    @field_validator(
        "start_date", "end_date", "issue_date", "expiry_date",
        mode="before", check_fields=False,
    )
    @classmethod
    def accept_month_dates(cls, v):
        return parse_partial_date(v)


class ExperienceCreate(_DatedSection):
    position: str = Field(min_length=2, max_length=200)
    facility: str = Field(min_length=2, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    duration: str | None = Field(None, max_length=100)
    is_current: bool = False


class ExperienceUpdate(_DatedSection):
    position: str | None = Field(None, min_length=2, max_length=200)
    facility: str | None = Field(None, min_length=2, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    duration: str | None = Field(None, max_length=100)
    is_current: bool | None = None


class CertificationCreate(_DatedSection):
    certification: str = Field(min_length=2, max_length=200)
    issuing_organization: str | None = Field(None, max_length=200)
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = Field(None, max_length=100)


class CertificationUpdate(_DatedSection):
    certification: str | None = Field(None, min_length=2, max_length=200)
    issuing_organization: str | None = Field(None, max_length=200)
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = Field(None, max_length=100)
