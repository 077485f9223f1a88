"""Profile Document Service: metadata rows for files the client already uploaded.

Invariants:
    - Rows are keyed by the subject (user_id) as well as the job-seeker profile;
      update/delete answer 404 for an unknown id and 403 for another user's document
    - Creating a document requires a job-seeker profile
    - New documents are never pre-verified
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select

from app.core.errors import ForbiddenError, NotFoundError
from app.infrastructure.row_store import RowStore
from app.models.document import ProfileDocument
from app.schemas.document import DocumentCreate, DocumentUpdate
from app.services.common import mapped_errors, rows, utcnow
from app.services.ownership import resolve_job_seeker_id, subject_uuid

logger = logging.getLogger(__name__)


async def list_documents(store: RowStore, subject_id: str) -> list[dict[str, Any]]:
    with mapped_errors("fetch documents"):
        found = await store.fetch_all(
            select(ProfileDocument)
            .where(ProfileDocument.user_id == subject_uuid(subject_id))
            .order_by(ProfileDocument.uploaded_at.desc()),
        )
    return rows(found)


async def create(
    store: RowStore, subject_id: str, body: DocumentCreate,
) -> dict[str, Any]:
    job_seeker_id = await resolve_job_seeker_id(store, subject_id)
    with mapped_errors("create document"):
        document = await store.insert(ProfileDocument(
            user_id=subject_uuid(subject_id),
            job_seeker_id=job_seeker_id,
            uploaded_at=utcnow(),
            is_verified=False,
            **body.model_dump(),
        ))
    logger.info(f"Document {document.id} registered", extra={"user_id": subject_id})
    return document.to_dict()


async def _owned_document(
    store: RowStore, document_id: UUID, subject_id: str, verb: str,
) -> ProfileDocument:
    with mapped_errors("fetch document"):
        document = await store.fetch_optional(
            select(ProfileDocument).where(ProfileDocument.id == document_id),
        )
    if not document:
        raise NotFoundError("Document not found")
    if document.user_id != subject_uuid(subject_id):
        raise ForbiddenError(f"You do not have permission to {verb} this document")
    return document


async def update(
    store: RowStore, document_id: UUID, subject_id: str, body: DocumentUpdate,
) -> dict[str, Any]:
    document = await _owned_document(store, document_id, subject_id, "update")
    values = body.changes()
    if not values:
        return document.to_dict()
    with mapped_errors("update document"):
        document = await store.update(
            ProfileDocument, values, ProfileDocument.id == document_id,
        )
    return document.to_dict()


async def delete(store: RowStore, document_id: UUID, subject_id: str) -> None:
    await _owned_document(store, document_id, subject_id, "delete")
    with mapped_errors("delete document"):
        await store.delete(ProfileDocument, ProfileDocument.id == document_id)
    logger.info(f"Document {document_id} deleted", extra={"user_id": subject_id})
