# src/modules/documents/documents_controller.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.auth.dependencies import get_current_user, require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User
from src.models.models import UserRole

from . import documents_service as service
from .schemas import (
    DocumentCreateRequest, DocumentListResponse, FolderCreateRequest,
    FolderListResponse, FolderUpdateRequest, StorageActionResponse,
)

router = APIRouter(prefix="/storage", tags=["Documents"])


def _check(result: Optional[StorageActionResponse], not_found: str) -> StorageActionResponse:
    if result is None:
        raise HTTPException(status_code=404, detail=not_found)
    if not result.success:
        raise HTTPException(status_code=403, detail=result.message)
    return result


@router.get("/folders", response_model=FolderListResponse)
async def list_folders(
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    return await service.list_visible_folders(store, current_user)


@router.post("/folders", response_model=StorageActionResponse, status_code=201)
async def create_folder(
    request: FolderCreateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.DOCTOR, UserRole.ADMIN))
):
    return await service.create_folder(store, current_user, request)


@router.patch("/folders/{folder_id}", response_model=StorageActionResponse)
async def update_folder(
    folder_id: str,
    request: FolderUpdateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    result = await service.update_folder(store, current_user, folder_id, request)
    return _check(result, GlobalMessages.FOLDER_NOT_FOUND)


@router.post("/folders/{folder_id}/toggle-privacy", response_model=StorageActionResponse)
async def toggle_privacy(
    folder_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Switch a folder between private and global."""
    result = await service.toggle_privacy(store, current_user, folder_id)
    return _check(result, GlobalMessages.FOLDER_NOT_FOUND)


@router.delete("/folders/{folder_id}", response_model=StorageActionResponse)
async def delete_folder(
    folder_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    result = await service.delete_folder(store, current_user, folder_id)
    return _check(result, GlobalMessages.FOLDER_NOT_FOUND)


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    folder_id: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    result = await service.list_documents(store, current_user, folder_id)
    if result is None:
        raise HTTPException(status_code=404, detail=GlobalMessages.FOLDER_NOT_FOUND)
    return result


@router.post("/documents", response_model=StorageActionResponse, status_code=201)
async def add_document(
    request: DocumentCreateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.DOCTOR, UserRole.ADMIN))
):
    result = await service.add_document(store, current_user, request)
    return _check(result, GlobalMessages.FOLDER_NOT_FOUND)


@router.delete("/documents/{document_id}", response_model=StorageActionResponse)
async def delete_document(
    document_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    result = await service.delete_document(store, current_user, document_id)
    return _check(result, GlobalMessages.DOCUMENT_NOT_FOUND)
