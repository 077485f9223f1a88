"""Application Schemas: apply to a job, employer status changes."""

from uuid import UUID

from pydantic import Field

from app.core.domain_types import ApplicationStatus
from app.schemas.common import HTTP_URL_PATTERN, RequestModel


class ApplicationCreate(RequestModel):
    job_id: UUID
    cover_letter: str | None = Field(None, max_length=5000)
    resume_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)


class ApplicationStatusUpdate(RequestModel):
    status: ApplicationStatus
    notes: str | None = Field(None, max_length=2000)
