# src/modules/dashboard/schemas.py
"""Dashboard module schemas."""

from typing import List

from pydantic import BaseModel

from src.modules.appointments.schemas import AppointmentResponse


# ============================================================================
# ROLE DASHBOARDS
# ============================================================================

class AdminStats(BaseModel):
    total_doctors: int = 0
    total_patients: int = 0
    todays_appointments: int = 0
    monthly_appointments: int = 0


class AdminDashboardResponse(BaseModel):
    stats: AdminStats
    recent_appointments: List[AppointmentResponse] = []


class DoctorStats(BaseModel):
    total_patients: int = 0
    todays_appointments: int = 0
    upcoming_appointments: int = 0
    monthly_appointments: int = 0


class DoctorDashboardResponse(BaseModel):
    stats: DoctorStats
    todays_schedule: List[AppointmentResponse] = []


class PatientStats(BaseModel):
    total_appointments: int = 0
    total_reports: int = 0
    upcoming_appointments: int = 0


class PatientDashboardResponse(BaseModel):
    stats: PatientStats
    upcoming: List[AppointmentResponse] = []


# ============================================================================
# ANALYTICS
# ============================================================================

class SpecializationStat(BaseModel):
    specialization: str
    doctors: int
    average_experience: float


class AnalyticsResponse(BaseModel):
    total_doctors: int
    specializations: List[SpecializationStat]
