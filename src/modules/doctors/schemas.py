# src/modules/doctors/schemas.py
"""Doctor directory schemas."""

from typing import List, Optional
from pydantic import BaseModel


class DoctorSummary(BaseModel):
    """Doctor card shown in recommendations and search results."""
    id: str
    name: str
    specialization: str
    experience_years: int
    qualification: str
    consultation_fee_minor_units: int
    rating: Optional[float] = None


class DoctorListResponse(BaseModel):
    doctors: List[DoctorSummary]
    total: int
