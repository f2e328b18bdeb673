# src/modules/appointments/schemas.py
"""Appointments module Pydantic schemas."""

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field

from src.models.models import AppointmentStatus


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class AppointmentCreateRequest(BaseModel):
    """Request to book a new appointment."""
    doctor_id: str
    date: date
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="HH:MM")
    symptoms: Optional[str] = None
    notes: Optional[str] = None


class AppointmentStatusUpdateRequest(BaseModel):
    """Request to complete or cancel an appointment."""
    status: AppointmentStatus


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class AppointmentResponse(BaseModel):
    """Full appointment details."""
    id: str
    patient_id: str
    doctor_id: str
    patient_name: str
    doctor_name: str
    date: date
    time: str
    status: AppointmentStatus
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentResponse]
    total: int


class AppointmentActionResponse(BaseModel):
    """Response for appointment actions."""
    success: bool
    message: str
    appointment: Optional[AppointmentResponse] = None
