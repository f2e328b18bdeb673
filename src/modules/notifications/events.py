# src/modules/notifications/events.py
"""Domain events that produce notifications."""

from typing import List, Optional, Union

from pydantic import BaseModel

from src.models.entities import Appointment, MedicalReport, User
from src.models.models import AppointmentStatus, UserRole


class NewAppointment(BaseModel):
    appointment: Appointment


class AppointmentStatusChanged(BaseModel):
    appointment: Appointment
    previous_status: AppointmentStatus


class NewMedicalReport(BaseModel):
    report: MedicalReport


class RoleBroadcast(BaseModel):
    title: str
    message: str
    role: UserRole
    link: Optional[str] = None


class NewUserRegistered(BaseModel):
    user: User
    admin_ids: List[str]


DomainEvent = Union[NewAppointment, AppointmentStatusChanged, NewMedicalReport, RoleBroadcast, NewUserRegistered]
