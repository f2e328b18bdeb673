# src/modules/reports/reports_service.py
"""Medical reports written by doctors after a consultation or upload."""

import logging
from typing import Optional

from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import MedicalReport, PatientProfile, User
from src.models.models import Collections, UserRole
from src.modules.notifications.events import NewMedicalReport
from src.modules.notifications.fanout import notify
from src.modules.user import user_service

from .schemas import (
    ReportActionResponse, ReportCreateRequest, ReportListResponse,
    ReportResponse, ReportUpdateRequest,
)

logger = logging.getLogger(__name__)


def _to_response(report: MedicalReport) -> ReportResponse:
    return ReportResponse(**report.model_dump())


async def _get_report(store: DocumentStore, report_id: str) -> Optional[MedicalReport]:
    document = await store.find_one(Collections.MEDICAL_REPORTS, report_id)
    return MedicalReport.model_validate(document) if document else None


def _can_read(user: User, report: MedicalReport) -> bool:
    match user.role:
        case UserRole.ADMIN:
            return True
        case UserRole.DOCTOR:
            return report.doctor_id == user.id
        case _:
            return report.patient_id == user.id


async def create_report(
    store: DocumentStore,
    doctor: User,
    request: ReportCreateRequest
) -> ReportActionResponse:
    """Store a report for a patient and notify them. Names are copied as of now."""
    patient = await user_service.get_user(store, request.patient_id)
    if not isinstance(patient, PatientProfile):
        return ReportActionResponse(success=False, message=GlobalMessages.PATIENT_NOT_FOUND)

    report = MedicalReport(
        patient_id=patient.id,
        doctor_id=doctor.id,
        patient_name=patient.name,
        doctor_name=doctor.name,
        **request.model_dump(exclude={"patient_id"})
    )
    report.id = await store.insert(Collections.MEDICAL_REPORTS, report.to_document())
    logger.info("Medical report %s created by %s for %s", report.id, doctor.id, patient.id)

    await notify(store, NewMedicalReport(report=report))

    return ReportActionResponse(success=True, message=GlobalMessages.REPORT_CREATED, report=_to_response(report))


async def update_report(
    store: DocumentStore,
    actor: User,
    report_id: str,
    request: ReportUpdateRequest
) -> Optional[ReportActionResponse]:
    """Edit a report. Only its author or an admin may; others get None."""
    report = await _get_report(store, report_id)
    if report is None:
        return None
    if actor.role != UserRole.ADMIN and report.doctor_id != actor.id:
        return None

    changes = request.model_dump(exclude_unset=True)
    if not changes:
        return ReportActionResponse(success=True, message=GlobalMessages.REPORT_UPDATED, report=_to_response(report))

    updated = report.model_copy(update=changes)
    # Cleared optional fields are written as null
    partial = {
        MedicalReport.model_fields[name].alias: value
        for name, value in updated.model_dump(mode="json", include=set(changes)).items()
    }
    await store.update(Collections.MEDICAL_REPORTS, report.id, partial)

    return ReportActionResponse(success=True, message=GlobalMessages.REPORT_UPDATED, report=_to_response(updated))


async def get_reports(store: DocumentStore, user: User, patient_id: Optional[str] = None) -> ReportListResponse:
    """Reports visible to the user, newest first."""
    match user.role:
        case UserRole.PATIENT:
            filters = {"patientId": user.id}
        case UserRole.DOCTOR:
            filters = {"doctorId": user.id}
        case _:
            filters = {}
    if patient_id and user.role != UserRole.PATIENT:
        filters["patientId"] = patient_id

    documents = await store.find_many(Collections.MEDICAL_REPORTS, filters)
    reports = sorted(
        (MedicalReport.model_validate(d) for d in documents),
        key=lambda r: r.created_at,
        reverse=True
    )
    return ReportListResponse(reports=[_to_response(r) for r in reports], total=len(reports))


async def get_report(store: DocumentStore, user: User, report_id: str) -> Optional[ReportResponse]:
    report = await _get_report(store, report_id)
    if report is None or not _can_read(user, report):
        return None
    return _to_response(report)
