# src/modules/dashboard/dashboard_controller.py
"""Dashboard controller with API endpoints."""

from typing import Union

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_current_user, require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.models.entities import User
from src.models.models import UserRole

from . import dashboard_service as service
from .schemas import (
    AdminDashboardResponse, AnalyticsResponse, DoctorDashboardResponse,
    PatientDashboardResponse,
)


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=Union[AdminDashboardResponse, DoctorDashboardResponse, PatientDashboardResponse])
async def get_dashboard(
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """
    Get dashboard data for the caller's role:
    - Admin: head counts, appointment volume, recent bookings
    - Doctor: patients seen, today's schedule
    - Patient: appointments, reports, upcoming visits
    """
    return await service.get_dashboard(store, current_user)


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.ADMIN))
):
    """Doctor counts per specialization."""
    return await service.get_analytics(store)
