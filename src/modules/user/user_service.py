# src/modules/user/user_service.py

import logging
from typing import List, Optional

from pydantic import ValidationError

from src.auth.schemas import Identity
from src.common.store.document_store import DocumentStore, StoreError
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import (
    AdminProfile, DoctorProfile, PatientProfile, User, parse_user,
)
from src.models.models import Collections, UserRole
from src.modules.notifications.events import NewUserRegistered
from src.modules.notifications.fanout import notify

from .schemas import ProfileActionResponse, RegisterProfileRequest, UpdateProfileRequest

logger = logging.getLogger(__name__)


def profile_payload(user: User) -> dict:
    """Public representation of a profile."""
    return {"id": user.id, **user.model_dump(mode="json", exclude={"id"})}


async def get_user(store: DocumentStore, user_id: str) -> Optional[User]:
    """Load one profile, or None when it is missing or malformed."""
    document = await store.find_one(Collections.USERS, user_id)
    if document is None:
        return None
    try:
        return parse_user(document)
    except ValidationError as e:
        logger.warning("Stored profile %s is invalid: %s", user_id, e)
        return None


async def list_users(store: DocumentStore, role: Optional[UserRole] = None) -> List[User]:
    filters = {"role": role.value} if role else {}
    users = []
    for document in await store.find_many(Collections.USERS, filters):
        try:
            users.append(parse_user(document))
        except ValidationError as e:
            logger.warning("Skipping invalid profile %s: %s", document.get("id"), e)
    return users


def build_profile(user_id: str, email: str, request: RegisterProfileRequest) -> User:
    common = {"id": user_id, "email": email, "name": request.name, "phone": request.phone}
    match request.role:
        case UserRole.DOCTOR:
            return DoctorProfile(
                **common,
                specialization=request.specialization or "",
                experience_years=request.experience_years,
                qualification=request.qualification or "",
                consultation_fee_minor_units=request.consultation_fee_minor_units or 0,
            )
        case UserRole.ADMIN:
            return AdminProfile(**common)
        case _:
            return PatientProfile(
                **common,
                age=request.age,
                date_of_birth=request.date_of_birth,
                blood_group=request.blood_group,
                address=request.address,
                emergency_contact=request.emergency_contact,
                allergies=request.allergies or [],
                medical_history=request.medical_history or [],
            )


async def _notify_admins(store: DocumentStore, user: User) -> None:
    try:
        admins = await list_users(store, UserRole.ADMIN)
    except StoreError:
        logger.exception("Error listing admins to announce new user %s", user.id)
        return
    admin_ids = [admin.id for admin in admins if admin.id != user.id]
    await notify(store, NewUserRegistered(user=user, admin_ids=admin_ids))


async def create_profile(store: DocumentStore, user_id: str, email: str, request: RegisterProfileRequest) -> ProfileActionResponse:
    """Store a profile under the identity provider's user id and tell the admins."""
    if await store.find_one(Collections.USERS, user_id) is not None:
        return ProfileActionResponse(success=False, message=GlobalMessages.PROFILE_ALREADY_EXISTS)

    user = build_profile(user_id, email, request)
    await store.insert(Collections.USERS, {"id": user_id, **user.to_document()})
    logger.info("Registered %s profile %s", user.role, user_id)

    await _notify_admins(store, user)
    return ProfileActionResponse(success=True, message="Profile created successfully.", profile=profile_payload(user))


async def register_profile(store: DocumentStore, identity: Identity, request: RegisterProfileRequest) -> ProfileActionResponse:
    """
    Self-registration for an authenticated identity.

    Admin profiles can only be self-registered while no admin exists yet;
    afterwards admins are created by other admins.
    """
    if request.role == UserRole.ADMIN and await list_users(store, UserRole.ADMIN):
        return ProfileActionResponse(success=False, message=GlobalMessages.INSUFFICIENT_PERMISSIONS)
    return await create_profile(store, identity.user_id, identity.email or "", request)


async def update_profile(store: DocumentStore, user: User, request: UpdateProfileRequest) -> User:
    """
    Apply profile edits that exist on the user's role variant.

    Names already copied onto appointments and reports are not rewritten.
    """
    changes = {
        key: value for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None and key in type(user).model_fields
    }
    updated = type(user).model_validate({**user.model_dump(), **changes})
    await store.update(Collections.USERS, user.id, updated.to_document())
    return updated


async def delete_user(store: DocumentStore, user_id: str) -> bool:
    return await store.delete(Collections.USERS, user_id)
