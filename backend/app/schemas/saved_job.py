"""Saved Job Schemas."""

from uuid import UUID

from app.schemas.common import RequestModel


class SaveJobRequest(RequestModel):
    job_id: UUID
