"""Profile Document Schemas: metadata for files already uploaded to storage."""

from datetime import datetime

from pydantic import Field

from app.core.domain_types import DocumentType
from app.schemas.common import HTTP_URL_PATTERN, RequestModel


class DocumentCreate(RequestModel):
    document_type: DocumentType
    document_name: str = Field(min_length=1, max_length=255)
    file_url: str = Field(min_length=1, max_length=2048, pattern=HTTP_URL_PATTERN)
    file_size: int | None = Field(None, ge=0)
    mime_type: str | None = Field(None, max_length=100)
    expires_at: datetime | None = None
    notes: str | None = Field(None, max_length=2000)


class DocumentUpdate(RequestModel):
    document_type: DocumentType | None = None
    document_name: str | None = Field(None, min_length=1, max_length=255)
    file_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)
    file_size: int | None = Field(None, ge=0)
    mime_type: str | None = Field(None, max_length=100)
    expires_at: datetime | None = None
    notes: str | None = Field(None, max_length=2000)
