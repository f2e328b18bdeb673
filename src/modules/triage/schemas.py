# src/modules/triage/schemas.py
"""Triage module Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from src.models.models import MessageKind, Urgency
from src.modules.doctors.schemas import DoctorSummary


class Classification(BaseModel):
    """Result of classifying one free-text message."""
    kind: MessageKind
    category: Optional[str] = None
    urgency: Urgency
    response: str
    tips: List[str] = Field(default_factory=list)


class TriageRequest(BaseModel):
    symptoms: str = Field(..., max_length=2000)


class TriageResponse(BaseModel):
    kind: MessageKind
    category: Optional[str] = None
    urgency: Urgency
    response: str
    tips: List[str]
    follow_up_questions: List[str]
    suggested_doctors: List[DoctorSummary]
