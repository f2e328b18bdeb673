# src/modules/dashboard/stats.py
"""Counting helpers for the role dashboards. Everything here is pure."""

from collections import OrderedDict
from datetime import date
from typing import Iterable, List

from src.models.entities import Appointment, DoctorProfile, User
from src.models.models import AppointmentStatus, UserRole

from .schemas import AdminStats, DoctorStats, PatientStats, SpecializationStat


def _same_month(day: date, today: date) -> bool:
    return day.year == today.year and day.month == today.month


def _is_upcoming(appointment: Appointment, today: date) -> bool:
    return appointment.status == AppointmentStatus.SCHEDULED and appointment.date >= today


def todays(appointments: Iterable[Appointment], today: date) -> List[Appointment]:
    return sorted((a for a in appointments if a.date == today), key=lambda a: a.time)


def upcoming(appointments: Iterable[Appointment], today: date) -> List[Appointment]:
    """Scheduled appointments from today on, soonest first."""
    return sorted(
        (a for a in appointments if _is_upcoming(a, today)),
        key=lambda a: (a.date, a.time)
    )


def most_recent(appointments: Iterable[Appointment], limit: int = 5) -> List[Appointment]:
    return sorted(appointments, key=lambda a: a.created_at, reverse=True)[:limit]


def admin_stats(users: List[User], appointments: List[Appointment], today: date) -> AdminStats:
    return AdminStats(
        total_doctors=sum(1 for u in users if u.role == UserRole.DOCTOR),
        total_patients=sum(1 for u in users if u.role == UserRole.PATIENT),
        todays_appointments=sum(1 for a in appointments if a.date == today),
        monthly_appointments=sum(1 for a in appointments if _same_month(a.date, today)),
    )


def doctor_stats(appointments: List[Appointment], today: date) -> DoctorStats:
    """Stats over one doctor's appointments."""
    return DoctorStats(
        total_patients=len({a.patient_id for a in appointments}),
        todays_appointments=sum(
            1 for a in appointments
            if a.date == today and a.status == AppointmentStatus.SCHEDULED
        ),
        upcoming_appointments=sum(1 for a in appointments if _is_upcoming(a, today)),
        monthly_appointments=sum(1 for a in appointments if _same_month(a.date, today)),
    )


def patient_stats(appointments: List[Appointment], report_count: int, today: date) -> PatientStats:
    return PatientStats(
        total_appointments=len(appointments),
        total_reports=report_count,
        upcoming_appointments=sum(1 for a in appointments if _is_upcoming(a, today)),
    )


def specialization_breakdown(doctors: Iterable[DoctorProfile]) -> List[SpecializationStat]:
    """
    Doctor head count and mean years of experience per specialization, in
    order of first appearance. Doctors without a recorded experience count
    as zero years.
    """
    groups: "OrderedDict[str, List[int]]" = OrderedDict()
    for doctor in doctors:
        key = doctor.specialization or "Unspecified"
        groups.setdefault(key, []).append(doctor.experience_years or 0)

    return [
        SpecializationStat(
            specialization=name,
            doctors=len(years),
            average_experience=round(sum(years) / len(years), 1),
        )
        for name, years in groups.items()
    ]
