# src/modules/user/schemas.py

from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from src.models.entities import TimeSlot
from src.models.models import UserRole


class RegisterProfileRequest(BaseModel):
    """
    Profile details for a freshly authenticated account.

    Doctor and patient fields are only applied to the matching role.
    """
    role: UserRole = UserRole.PATIENT
    name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = None

    # Doctor fields
    specialization: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    qualification: Optional[str] = None
    consultation_fee_minor_units: Optional[int] = Field(None, ge=0)

    # Patient fields
    age: Optional[int] = Field(None, ge=0)
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: Optional[List[str]] = None
    medical_history: Optional[List[str]] = None


class CreateUserRequest(RegisterProfileRequest):
    """Admin-created account; the id comes from the identity provider."""
    user_id: str
    email: EmailStr


class UpdateProfileRequest(BaseModel):
    """Profile edits. The role is not editable."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    qualification: Optional[str] = None
    consultation_fee_minor_units: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    available_slots: Optional[List[TimeSlot]] = None
    age: Optional[int] = Field(None, ge=0)
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: Optional[List[str]] = None
    medical_history: Optional[List[str]] = None


class ProfileActionResponse(BaseModel):
    success: bool
    message: str
    profile: Optional[dict] = None
