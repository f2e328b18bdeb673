# src/auth/auth_controller.py

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_identity
from src.auth.schemas import Identity, MeResponse
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.models.models import Collections

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=MeResponse)
async def me(
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store)
):
    """Who the token belongs to and whether a profile has been registered."""
    document = await store.find_one(Collections.USERS, identity.user_id)
    return MeResponse(
        user_id=identity.user_id,
        email=identity.email,
        role=document.get("role") if document else None,
        name=document.get("name") if document else None,
        has_profile=document is not None
    )
