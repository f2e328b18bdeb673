# src/modules/reports/schemas.py
"""Medical report schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.models.models import ReportType


class ReportCreateRequest(BaseModel):
    patient_id: str
    diagnosis: str = Field(..., min_length=1)
    prescription: str = ""
    notes: Optional[str] = None
    symptoms: Optional[str] = None
    treatment_plan: Optional[str] = None
    follow_up_date: Optional[date] = None
    report_type: ReportType = ReportType.CONSULTATION
    file_url: Optional[str] = None


class ReportUpdateRequest(BaseModel):
    diagnosis: Optional[str] = Field(None, min_length=1)
    prescription: Optional[str] = None
    notes: Optional[str] = None
    symptoms: Optional[str] = None
    treatment_plan: Optional[str] = None
    follow_up_date: Optional[date] = None

    @field_validator("diagnosis", "prescription")
    def not_cleared(cls, value):
        # These may be omitted but never set to null
        if value is None:
            raise ValueError("cannot be null")
        return value


class ReportResponse(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    patient_name: str
    doctor_name: str
    diagnosis: str
    prescription: str
    notes: Optional[str] = None
    symptoms: Optional[str] = None
    treatment_plan: Optional[str] = None
    follow_up_date: Optional[date] = None
    report_type: ReportType
    file_url: Optional[str] = None
    ai_summary: Optional[str] = None
    created_at: datetime


class ReportListResponse(BaseModel):
    reports: List[ReportResponse]
    total: int


class ReportActionResponse(BaseModel):
    success: bool
    message: str
    report: Optional[ReportResponse] = None
