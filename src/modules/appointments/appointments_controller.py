# src/modules/appointments/appointments_controller.py
"""Appointments controller with API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.auth.dependencies import get_current_user, require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User
from src.models.models import UserRole

from . import appointments_service as service
from .schemas import (
    AppointmentActionResponse, AppointmentCreateRequest, AppointmentListResponse,
    AppointmentResponse, AppointmentStatusUpdateRequest,
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("", response_model=AppointmentListResponse)
async def get_appointments(
    status: Optional[str] = Query(None, description="Filter by status: all, scheduled, completed, cancelled"),
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Get the caller's appointments (all appointments for admins)."""
    return await service.get_appointments(store, current_user, status)


@router.post("", response_model=AppointmentActionResponse, status_code=201)
async def book_appointment(
    request: AppointmentCreateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.PATIENT))
):
    """Book a new appointment."""
    result = await service.book_appointment(store, current_user, request)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Get a specific appointment."""
    appointment = await service.get_appointment_by_id(store, current_user, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail=GlobalMessages.APPOINTMENT_NOT_FOUND)
    return appointment


@router.put("/{appointment_id}/status", response_model=AppointmentActionResponse)
async def update_status(
    appointment_id: str,
    request: AppointmentStatusUpdateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Complete or cancel an appointment."""
    result = await service.update_appointment_status(store, current_user, appointment_id, request.status)
    if result is None:
        raise HTTPException(status_code=404, detail=GlobalMessages.APPOINTMENT_NOT_FOUND)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result
