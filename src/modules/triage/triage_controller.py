# src/modules/triage/triage_controller.py
"""Triage controller with API routes."""

from fastapi import APIRouter, Depends

from src.auth.dependencies import require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.models.entities import User
from src.models.models import UserRole

from . import triage_service as service
from .schemas import TriageRequest, TriageResponse

router = APIRouter(prefix="/triage", tags=["Triage"])


@router.post("/analyze", response_model=TriageResponse)
async def analyze(
    request: TriageRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.PATIENT, UserRole.ADMIN))
):
    """Classify a symptom description and suggest matching doctors."""
    return await service.analyze_symptoms(store, request.symptoms)


@router.get("/follow-ups/{category}", response_model=list[str])
async def get_follow_ups(category: str):
    """Clarifying questions for a specialization."""
    return service.follow_up_questions(category)
