# src/modules/documents/schemas.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.models.models import FolderPrivacy


class FolderCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    privacy: FolderPrivacy = FolderPrivacy.PRIVATE


class FolderUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    privacy: Optional[FolderPrivacy] = None


class FolderResponse(BaseModel):
    id: str
    name: str
    owner_id: str
    privacy: FolderPrivacy
    created_at: datetime


class DocumentCreateRequest(BaseModel):
    """Metadata of a file already uploaded to object storage."""
    name: str = Field(..., min_length=1)
    url: str
    type: str
    size: int = Field(0, ge=0)
    folder_id: Optional[str] = None


class DocumentResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    url: str
    type: str
    size: int
    folder_id: Optional[str] = None
    created_at: datetime


class FolderListResponse(BaseModel):
    folders: List[FolderResponse]


class DocumentListResponse(BaseModel):
    documents: List[DocumentResponse]


class StorageActionResponse(BaseModel):
    success: bool
    message: str
    folder: Optional[FolderResponse] = None
    document: Optional[DocumentResponse] = None
