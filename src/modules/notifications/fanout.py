# src/modules/notifications/fanout.py
"""
Notification fan-out.

Turns a domain event into one notification per recipient and writes them as
independent concurrent tasks. There is no transaction across recipients: a
failed write is logged and reported in the result while its siblings still
complete. Callers treat notifications as a secondary effect and never fail
their own action because of them.
"""

import asyncio
import logging
from typing import List

from src.common.store.document_store import DocumentStore, StoreError
from src.common.utils.global_functions import format_date
from src.models.entities import Appointment, Notification, parse_user
from src.models.models import AppointmentStatus, Collections, NotificationType

from .events import (
    AppointmentStatusChanged, DomainEvent, NewAppointment, NewMedicalReport,
    NewUserRegistered, RoleBroadcast,
)
from .notifications_service import build_notification, create_notification
from .schemas import FanoutFailure, FanoutResult

logger = logging.getLogger(__name__)

DOCTOR_APPOINTMENTS_LINK = "/doctor/appointments"
PATIENT_APPOINTMENTS_LINK = "/patient/appointments"
PATIENT_REPORTS_LINK = "/patient/medical-reports"
ADMIN_SETTINGS_LINK = "/admin/settings"


def appointment_notifications(appointment: Appointment) -> List[Notification]:
    """Doctor-facing and patient-facing notices for a new booking, in that order."""
    when = f"{format_date(appointment.date)} at {appointment.time}"
    return [
        build_notification(
            appointment.doctor_id,
            "New Appointment",
            f"You have a new appointment with {appointment.patient_name} on {when}",
            NotificationType.APPOINTMENT,
            appointment.id,
            DOCTOR_APPOINTMENTS_LINK
        ),
        build_notification(
            appointment.patient_id,
            "Appointment Confirmation",
            f"Your appointment with Dr. {appointment.doctor_name} is confirmed for {when}",
            NotificationType.APPOINTMENT,
            appointment.id,
            PATIENT_APPOINTMENTS_LINK
        ),
    ]


def status_change_notification(appointment: Appointment, previous_status: AppointmentStatus) -> Notification:
    on_date = format_date(appointment.date)
    if appointment.status == AppointmentStatus.COMPLETED:
        message = f"Your appointment with {appointment.doctor_name} on {on_date} has been marked as completed"
    elif appointment.status == AppointmentStatus.CANCELLED:
        message = f"Your appointment with {appointment.doctor_name} on {on_date} has been cancelled"
    else:
        message = (
            f"Your appointment status has been updated from "
            f"{AppointmentStatus(previous_status).value} to {appointment.status.value}"
        )

    return build_notification(
        appointment.patient_id,
        "Appointment Update",
        message,
        NotificationType.APPOINTMENT,
        appointment.id,
        PATIENT_APPOINTMENTS_LINK
    )


async def _role_recipients(store: DocumentStore, event: RoleBroadcast) -> List[str]:
    """Ids of every user currently holding the broadcast role."""
    try:
        documents = await store.find_many(Collections.USERS)
    except StoreError:
        logger.exception("Error listing users for %s broadcast", event.role.value)
        return []
    return [d["id"] for d in documents if d.get("role") == event.role.value]


async def plan_notifications(store: DocumentStore, event: DomainEvent) -> List[Notification]:
    """Decide who hears about ``event`` and what they are told."""
    match event:
        case NewAppointment(appointment=appointment):
            return appointment_notifications(appointment)

        case AppointmentStatusChanged(appointment=appointment, previous_status=previous):
            return [status_change_notification(appointment, previous)]

        case NewMedicalReport(report=report):
            return [build_notification(
                report.patient_id,
                "New Medical Report",
                f"Dr. {report.doctor_name} has created a new medical report for you",
                NotificationType.MEDICAL,
                report.id,
                PATIENT_REPORTS_LINK
            )]

        case RoleBroadcast():
            recipients = await _role_recipients(store, event)
            return [
                build_notification(user_id, event.title, event.message, NotificationType.SYSTEM, None, event.link)
                for user_id in recipients
            ]

        case NewUserRegistered(user=user, admin_ids=admin_ids):
            return [
                build_notification(
                    admin_id,
                    "New User Registration",
                    f"{user.name} has registered as a {user.role}",
                    NotificationType.SYSTEM,
                    user.id,
                    ADMIN_SETTINGS_LINK
                )
                for admin_id in admin_ids
            ]

    raise TypeError(f"Unsupported event: {type(event).__name__}")


async def deliver(store: DocumentStore, notifications: List[Notification]) -> FanoutResult:
    """Write each notification as its own task and collect per-task outcomes."""
    results = await asyncio.gather(
        *(create_notification(store, n) for n in notifications),
        return_exceptions=True
    )

    outcome = FanoutResult()
    for notification, result in zip(notifications, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error(
                "Failed to notify user %s (%s): %s",
                notification.user_id, notification.title, result
            )
            outcome.failed.append(FanoutFailure(user_id=notification.user_id, error=str(result)))
        else:
            outcome.delivered.append(result)
    return outcome


async def notify(store: DocumentStore, event: DomainEvent) -> FanoutResult:
    """
    Fan ``event`` out to its recipients.

    Never raises for store failures; they are logged and listed in
    ``FanoutResult.failed``.
    """
    notifications = await plan_notifications(store, event)
    result = await deliver(store, notifications)
    logger.info(
        "%s: %d notification(s) delivered, %d failed",
        type(event).__name__, len(result.delivered), len(result.failed)
    )
    return result
