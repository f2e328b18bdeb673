# src/modules/documents/access.py
"""Who may see and change doctor folders and documents."""

from typing import Optional

from src.models.entities import DoctorDocument, Folder, User
from src.models.models import FolderPrivacy, UserRole


def _is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN


def can_view_folder(folder: Folder, user: User) -> bool:
    """Private folders are visible to their owner only, global ones to everyone signed in."""
    if folder.privacy == FolderPrivacy.GLOBAL:
        return True
    return folder.owner_id == user.id


def can_modify_folder(folder: Folder, user: User) -> bool:
    """Renaming and adding files is reserved to the owner."""
    return folder.owner_id == user.id


def can_delete_folder(folder: Folder, user: User) -> bool:
    return folder.owner_id == user.id or _is_admin(user)


def can_change_privacy(folder: Folder, user: User) -> bool:
    return folder.owner_id == user.id or _is_admin(user)


def can_view_document(document: DoctorDocument, folder: Optional[Folder], user: User) -> bool:
    if folder is None:
        return document.owner_id == user.id
    return can_view_folder(folder, user)


def can_delete_document(document: DoctorDocument, folder: Optional[Folder], user: User) -> bool:
    if _is_admin(user):
        return True
    if document.owner_id != user.id:
        return False
    # Files in someone else's shared folder stay under that folder owner's control
    if folder is not None and folder.privacy == FolderPrivacy.GLOBAL and folder.owner_id != user.id:
        return False
    return True


def toggled(privacy: FolderPrivacy) -> FolderPrivacy:
    return FolderPrivacy.GLOBAL if privacy == FolderPrivacy.PRIVATE else FolderPrivacy.PRIVATE
