# src/modules/documents/documents_service.py
"""Doctor file storage: folders and the documents filed in them."""

import logging
from typing import Optional

from src.common.store.document_store import DocumentStore, StoreError
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import DoctorDocument, Folder, User
from src.models.models import Collections

from . import access
from .schemas import (
    DocumentCreateRequest, DocumentListResponse, DocumentResponse,
    FolderCreateRequest, FolderListResponse, FolderResponse,
    FolderUpdateRequest, StorageActionResponse,
)

logger = logging.getLogger(__name__)


def _folder_response(folder: Folder) -> FolderResponse:
    return FolderResponse(**folder.model_dump())


def _document_response(document: DoctorDocument) -> DocumentResponse:
    return DocumentResponse(**document.model_dump())


def _denied(message: str) -> StorageActionResponse:
    return StorageActionResponse(success=False, message=message)


async def get_folder(store: DocumentStore, folder_id: str) -> Optional[Folder]:
    document = await store.find_one(Collections.FOLDERS, folder_id)
    return Folder.model_validate(document) if document else None


async def list_visible_folders(store: DocumentStore, user: User) -> FolderListResponse:
    """Global folders plus the caller's own private ones."""
    documents = await store.find_many(Collections.FOLDERS)
    folders = [Folder.model_validate(d) for d in documents]
    return FolderListResponse(
        folders=[_folder_response(f) for f in folders if access.can_view_folder(f, user)]
    )


async def create_folder(store: DocumentStore, owner: User, request: FolderCreateRequest) -> StorageActionResponse:
    folder = Folder(name=request.name, owner_id=owner.id, privacy=request.privacy)
    folder.id = await store.insert(Collections.FOLDERS, folder.to_document())
    return StorageActionResponse(success=True, message="Folder created.", folder=_folder_response(folder))


async def update_folder(
    store: DocumentStore,
    user: User,
    folder_id: str,
    request: FolderUpdateRequest
) -> Optional[StorageActionResponse]:
    """Rename and/or set privacy. Owner only."""
    folder = await get_folder(store, folder_id)
    if folder is None or not access.can_view_folder(folder, user):
        return None
    if not access.can_modify_folder(folder, user):
        return _denied(GlobalMessages.FOLDER_ACCESS_DENIED)

    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        folder = folder.model_copy(update=changes)
        await store.update(Collections.FOLDERS, folder.id, {
            "name": folder.name, "privacy": folder.privacy.value
        })
    return StorageActionResponse(success=True, message="Folder updated.", folder=_folder_response(folder))


async def toggle_privacy(store: DocumentStore, user: User, folder_id: str) -> Optional[StorageActionResponse]:
    """Switch a folder between private and global. Owner or admin."""
    folder = await get_folder(store, folder_id)
    if folder is None:
        return None
    if not access.can_change_privacy(folder, user):
        return _denied(GlobalMessages.FOLDER_PRIVACY_DENIED)

    folder.privacy = access.toggled(folder.privacy)
    await store.update(Collections.FOLDERS, folder.id, {"privacy": folder.privacy.value})
    logger.info("Folder %s is now %s (changed by %s)", folder.id, folder.privacy.value, user.id)
    return StorageActionResponse(success=True, message="Folder privacy updated.", folder=_folder_response(folder))


async def delete_folder(store: DocumentStore, user: User, folder_id: str) -> Optional[StorageActionResponse]:
    """Delete a folder and the documents filed in it. Owner or admin."""
    folder = await get_folder(store, folder_id)
    if folder is None:
        return None
    if not access.can_delete_folder(folder, user):
        return _denied(GlobalMessages.FOLDER_ACCESS_DENIED)

    contents = await store.find_many(Collections.DOCUMENTS, {"folderId": folder.id})
    for document in contents:
        try:
            await store.delete(Collections.DOCUMENTS, document["id"])
        except StoreError:
            logger.exception("Error deleting document %s of folder %s", document["id"], folder.id)
    await store.delete(Collections.FOLDERS, folder.id)
    return StorageActionResponse(success=True, message="Folder deleted.")


async def list_documents(
    store: DocumentStore,
    user: User,
    folder_id: Optional[str] = None
) -> Optional[DocumentListResponse]:
    """
    Documents in a folder, or the caller's own unfiled documents when no
    folder is given. Returns None when the folder is missing or hidden.
    """
    if folder_id is None:
        documents = await store.find_many(Collections.DOCUMENTS, {"ownerId": user.id, "folderId": None})
    else:
        folder = await get_folder(store, folder_id)
        if folder is None or not access.can_view_folder(folder, user):
            return None
        documents = await store.find_many(Collections.DOCUMENTS, {"folderId": folder_id})

    return DocumentListResponse(
        documents=[_document_response(DoctorDocument.model_validate(d)) for d in documents]
    )


async def add_document(store: DocumentStore, owner: User, request: DocumentCreateRequest) -> Optional[StorageActionResponse]:
    """Record an uploaded file, optionally inside a folder the caller owns."""
    if request.folder_id is not None:
        folder = await get_folder(store, request.folder_id)
        if folder is None or not access.can_view_folder(folder, owner):
            return None
        if not access.can_modify_folder(folder, owner):
            return _denied(GlobalMessages.FOLDER_ACCESS_DENIED)

    document = DoctorDocument(owner_id=owner.id, **request.model_dump())
    record = document.to_document()
    # Unfiled documents keep an explicit null so they can be queried
    record["folderId"] = document.folder_id
    document.id = await store.insert(Collections.DOCUMENTS, record)
    return StorageActionResponse(success=True, message="Document saved.", document=_document_response(document))


async def delete_document(store: DocumentStore, user: User, document_id: str) -> Optional[StorageActionResponse]:
    found = await store.find_one(Collections.DOCUMENTS, document_id)
    if found is None:
        return None
    document = DoctorDocument.model_validate(found)
    folder = await get_folder(store, document.folder_id) if document.folder_id else None

    if not access.can_view_document(document, folder, user) and not access.can_delete_document(document, folder, user):
        return None
    if not access.can_delete_document(document, folder, user):
        return _denied(GlobalMessages.DOCUMENT_DELETE_DENIED)

    await store.delete(Collections.DOCUMENTS, document.id)
    return StorageActionResponse(success=True, message="Document deleted.")
