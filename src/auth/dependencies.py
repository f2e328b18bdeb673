# src/auth/dependencies.py

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from src.auth.auth_service import decode_identity
from src.auth.schemas import Identity
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User, parse_user
from src.models.models import Collections, UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()


async def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> Identity:
    """
    Dependency returning the caller's identity from the bearer token.
    """
    identity = decode_identity(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=GlobalMessages.INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"}
        )
    return identity


async def get_current_user(
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store)
) -> User:
    """
    Dependency to retrieve the profile of the authenticated caller.
    """
    document = await store.find_one(Collections.USERS, identity.user_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=GlobalMessages.PROFILE_NOT_FOUND)
    try:
        return parse_user(document)
    except ValidationError as e:
        logger.error("Stored profile %s is invalid: %s", identity.user_id, e)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=GlobalMessages.PROFILE_NOT_FOUND)


def require_role(*roles: UserRole):
    """Dependency factory allowing only callers holding one of ``roles``."""
    allowed = {role.value for role in roles}

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=GlobalMessages.INSUFFICIENT_PERMISSIONS)
        return current_user

    return dependency
