# src/modules/dashboard/dashboard_service.py
"""Dashboard service: loads records and hands them to the stats helpers."""

from datetime import date
from typing import List, Optional

from src.common.store.document_store import DocumentStore
from src.common.utils.global_functions import utc_today
from src.models.entities import Appointment, DoctorProfile, User
from src.models.models import Collections, UserRole
from src.modules.appointments.schemas import AppointmentResponse
from src.modules.user import user_service

from . import stats
from .schemas import (
    AdminDashboardResponse, AnalyticsResponse, DoctorDashboardResponse,
    PatientDashboardResponse,
)


def _responses(appointments: List[Appointment]) -> List[AppointmentResponse]:
    return [AppointmentResponse(**a.model_dump()) for a in appointments]


async def _appointments(store: DocumentStore, filters: Optional[dict] = None) -> List[Appointment]:
    documents = await store.find_many(Collections.APPOINTMENTS, filters)
    return [Appointment.model_validate(d) for d in documents]


async def get_admin_dashboard(store: DocumentStore, today: Optional[date] = None) -> AdminDashboardResponse:
    today = today or utc_today()
    users = await user_service.list_users(store)
    appointments = await _appointments(store)
    return AdminDashboardResponse(
        stats=stats.admin_stats(users, appointments, today),
        recent_appointments=_responses(stats.most_recent(appointments)),
    )


async def get_doctor_dashboard(
    store: DocumentStore,
    doctor: User,
    today: Optional[date] = None
) -> DoctorDashboardResponse:
    today = today or utc_today()
    appointments = await _appointments(store, {"doctorId": doctor.id})
    return DoctorDashboardResponse(
        stats=stats.doctor_stats(appointments, today),
        todays_schedule=_responses(stats.todays(appointments, today)),
    )


async def get_patient_dashboard(
    store: DocumentStore,
    patient: User,
    today: Optional[date] = None
) -> PatientDashboardResponse:
    today = today or utc_today()
    appointments = await _appointments(store, {"patientId": patient.id})
    reports = await store.find_many(Collections.MEDICAL_REPORTS, {"patientId": patient.id})
    return PatientDashboardResponse(
        stats=stats.patient_stats(appointments, len(reports), today),
        upcoming=_responses(stats.upcoming(appointments, today)[:5]),
    )


async def get_dashboard(store: DocumentStore, user: User):
    """The dashboard matching the caller's role."""
    match user.role:
        case UserRole.ADMIN:
            return await get_admin_dashboard(store)
        case UserRole.DOCTOR:
            return await get_doctor_dashboard(store, user)
        case _:
            return await get_patient_dashboard(store, user)


async def get_analytics(store: DocumentStore) -> AnalyticsResponse:
    doctors = [u for u in await user_service.list_users(store, UserRole.DOCTOR) if isinstance(u, DoctorProfile)]
    return AnalyticsResponse(
        total_doctors=len(doctors),
        specializations=stats.specialization_breakdown(doctors),
    )
