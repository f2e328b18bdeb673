# src/modules/user/user_controller.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from src.auth.dependencies import get_current_user, get_identity, require_role
from src.auth.schemas import Identity
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User
from src.models.models import UserRole
from src.modules.user import user_service, schemas

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/profile", response_model=schemas.ProfileActionResponse, status_code=201)
async def register_profile(
    request: schemas.RegisterProfileRequest,
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store)
):
    """
    Create the profile for the authenticated account.
    """
    result = await user_service.register_profile(store, identity, request)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)
    return result


@router.get("/profile")
async def get_profile(current_user: User = Depends(get_current_user)):
    """
    Retrieve the profile for the currently authenticated user.
    """
    return user_service.profile_payload(current_user)


@router.put("/profile")
async def update_profile(
    profile_data: schemas.UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_document_store)
):
    """
    Update the profile of the currently authenticated user.

    Only the provided fields will be updated.
    """
    updated_user = await user_service.update_profile(store, current_user, profile_data)
    return user_service.profile_payload(updated_user)


@router.get("/users")
async def list_users(
    role: Optional[UserRole] = None,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.ADMIN, UserRole.DOCTOR))
) -> List[dict]:
    """List profiles, optionally filtered by role."""
    users = await user_service.list_users(store, role)
    return [user_service.profile_payload(u) for u in users]


@router.post("/users", response_model=schemas.ProfileActionResponse, status_code=201)
async def create_user(
    request: schemas.CreateUserRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.ADMIN))
):
    """Create a profile on behalf of another account."""
    result = await user_service.create_profile(store, request.user_id, request.email, request)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)
    return result


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.ADMIN))
):
    deleted = await user_service.delete_user(store, user_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GlobalMessages.USER_NOT_FOUND)
    return {"success": True}
