# src/modules/reports/reports_controller.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.auth.dependencies import get_current_user, require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User
from src.models.models import UserRole

from . import reports_service as service
from .schemas import (
    ReportActionResponse, ReportCreateRequest, ReportListResponse,
    ReportResponse, ReportUpdateRequest,
)

router = APIRouter(prefix="/medical-reports", tags=["Medical Reports"])


@router.get("", response_model=ReportListResponse)
async def get_reports(
    patient_id: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Reports visible to the caller."""
    return await service.get_reports(store, current_user, patient_id)


@router.post("", response_model=ReportActionResponse, status_code=201)
async def create_report(
    request: ReportCreateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.DOCTOR))
):
    result = await service.create_report(store, current_user, request)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    report = await service.get_report(store, current_user, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail=GlobalMessages.REPORT_NOT_FOUND)
    return report


@router.put("/{report_id}", response_model=ReportActionResponse)
async def update_report(
    report_id: str,
    request: ReportUpdateRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.DOCTOR, UserRole.ADMIN))
):
    result = await service.update_report(store, current_user, report_id, request)
    if result is None:
        raise HTTPException(status_code=404, detail=GlobalMessages.REPORT_NOT_FOUND)
    return result
