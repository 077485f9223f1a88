"""Profile Document routes: metadata for files already uploaded to storage."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.dependencies import get_current_caller, get_store
from app.api.envelope import ok
from app.core.identity import Caller
from app.infrastructure.rate_limit import mutation_limit
from app.infrastructure.row_store import RowStore
from app.schemas.document import DocumentCreate, DocumentUpdate
from app.services import documents as document_service

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.get("")
async def list_documents(
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await document_service.list_documents(store, caller.subject_id))


@router.post("", status_code=status.HTTP_201_CREATED)
@mutation_limit
async def create_document(
    request: Request,
    body: DocumentCreate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(await document_service.create(store, caller.subject_id, body))


@router.put("/{document_id}")
@mutation_limit
async def update_document(
    request: Request,
    document_id: UUID,
    body: DocumentUpdate,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    return ok(
        await document_service.update(store, document_id, caller.subject_id, body),
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@mutation_limit
async def delete_document(
    request: Request,
    document_id: UUID,
    caller: Caller = Depends(get_current_caller),
    store: RowStore = Depends(get_store),
):
    await document_service.delete(store, document_id, caller.subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
