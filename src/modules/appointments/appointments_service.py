# src/modules/appointments/appointments_service.py
"""Appointments service for business logic."""

import logging
from typing import Optional

from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import Appointment, DoctorProfile, User
from src.models.models import AppointmentStatus, Collections, UserRole
from src.modules.notifications.events import AppointmentStatusChanged, NewAppointment
from src.modules.notifications.fanout import notify
from src.modules.user import user_service

from .schemas import (
    AppointmentActionResponse, AppointmentCreateRequest, AppointmentListResponse,
    AppointmentResponse,
)

logger = logging.getLogger(__name__)

FINAL_STATUSES = {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}


def _build_appointment_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(**appointment.model_dump())


def _is_participant(user: User, appointment: Appointment) -> bool:
    match user.role:
        case UserRole.ADMIN:
            return True
        case UserRole.DOCTOR:
            return appointment.doctor_id == user.id
        case _:
            return appointment.patient_id == user.id


async def _get_appointment(store: DocumentStore, appointment_id: str) -> Optional[Appointment]:
    document = await store.find_one(Collections.APPOINTMENTS, appointment_id)
    return Appointment.model_validate(document) if document else None


async def get_appointments(
    store: DocumentStore,
    user: User,
    status: Optional[str] = None
) -> AppointmentListResponse:
    """Appointments visible to ``user``: own for patients and doctors, all for admins."""
    match user.role:
        case UserRole.PATIENT:
            filters = {"patientId": user.id}
        case UserRole.DOCTOR:
            filters = {"doctorId": user.id}
        case _:
            filters = {}

    if status and status != "all":
        filters["status"] = status

    documents = await store.find_many(Collections.APPOINTMENTS, filters)
    appointments = [Appointment.model_validate(d) for d in documents]
    appointments.sort(key=lambda a: (a.date, a.time), reverse=True)

    return AppointmentListResponse(
        appointments=[_build_appointment_response(a) for a in appointments],
        total=len(appointments)
    )


async def get_appointment_by_id(
    store: DocumentStore,
    user: User,
    appointment_id: str
) -> Optional[AppointmentResponse]:
    """Get a single appointment the user takes part in."""
    appointment = await _get_appointment(store, appointment_id)
    if appointment is None or not _is_participant(user, appointment):
        return None
    return _build_appointment_response(appointment)


async def book_appointment(
    store: DocumentStore,
    patient: User,
    request: AppointmentCreateRequest
) -> AppointmentActionResponse:
    """
    Book an appointment for ``patient``.

    Display names are copied onto the appointment at booking time and are not
    refreshed later. Store errors on the appointment write propagate; the
    follow-up notifications never affect the outcome.
    """
    doctor = await user_service.get_user(store, request.doctor_id)
    if not isinstance(doctor, DoctorProfile):
        return AppointmentActionResponse(success=False, message=GlobalMessages.DOCTOR_NOT_FOUND)

    appointment = Appointment(
        patient_id=patient.id,
        doctor_id=doctor.id,
        patient_name=patient.name,
        doctor_name=doctor.name,
        date=request.date,
        time=request.time,
        status=AppointmentStatus.SCHEDULED,
        symptoms=request.symptoms,
        notes=request.notes
    )
    appointment.id = await store.insert(Collections.APPOINTMENTS, appointment.to_document())
    logger.info("Appointment %s booked: patient=%s doctor=%s", appointment.id, patient.id, doctor.id)

    await notify(store, NewAppointment(appointment=appointment))

    return AppointmentActionResponse(
        success=True,
        message=GlobalMessages.APPOINTMENT_BOOKED,
        appointment=_build_appointment_response(appointment)
    )


async def update_appointment_status(
    store: DocumentStore,
    actor: User,
    appointment_id: str,
    new_status: AppointmentStatus
) -> Optional[AppointmentActionResponse]:
    """
    Move a scheduled appointment to completed or cancelled.

    Doctors act on their own appointments, admins on any, patients may only
    cancel their own. Returns None when the appointment is not visible to the
    actor.
    """
    appointment = await _get_appointment(store, appointment_id)
    if appointment is None or not _is_participant(actor, appointment):
        return None

    if new_status not in FINAL_STATUSES:
        return AppointmentActionResponse(success=False, message=GlobalMessages.APPOINTMENT_INVALID_STATUS)
    if actor.role == UserRole.PATIENT and new_status != AppointmentStatus.CANCELLED:
        return AppointmentActionResponse(success=False, message=GlobalMessages.INSUFFICIENT_PERMISSIONS)
    if appointment.status in FINAL_STATUSES:
        return AppointmentActionResponse(
            success=False,
            message=GlobalMessages.APPOINTMENT_FINAL.format(status=appointment.status.value)
        )

    previous_status = appointment.status
    await store.update(Collections.APPOINTMENTS, appointment.id, {"status": new_status.value})
    appointment.status = new_status
    logger.info("Appointment %s: %s -> %s by %s", appointment.id, previous_status.value, new_status.value, actor.id)

    await notify(store, AppointmentStatusChanged(appointment=appointment, previous_status=previous_status))

    return AppointmentActionResponse(
        success=True,
        message=GlobalMessages.APPOINTMENT_UPDATED,
        appointment=_build_appointment_response(appointment)
    )
