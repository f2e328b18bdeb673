# src/models/entities.py
"""Record shapes stored in the document collections.

Documents are stored with camelCase keys (``patientId``, ``createdAt``); the
models accept either spelling and dump with aliases for storage.
"""

from datetime import date, datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from src.models.models import (
    AppointmentStatus, FolderPrivacy, NotificationType, ReportType,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None

    def to_document(self) -> dict:
        """Serialize for storage; the id lives outside the document body."""
        return self.model_dump(by_alias=True, mode="json", exclude={"id"}, exclude_none=True)


# ============================================================================
# USERS
# ============================================================================

class TimeSlot(Record):
    date: date
    start_time: str
    end_time: str
    is_available: bool = True


class UserBase(Record):
    email: str
    name: str
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class PatientProfile(UserBase):
    role: Literal["patient"] = "patient"
    age: Optional[int] = None
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    medical_history: List[str] = Field(default_factory=list)


class DoctorProfile(UserBase):
    role: Literal["doctor"] = "doctor"
    specialization: str = ""
    experience_years: Optional[int] = None
    qualification: str = ""
    consultation_fee_minor_units: int = 0
    rating: Optional[float] = None
    available_slots: List[TimeSlot] = Field(default_factory=list)


class AdminProfile(UserBase):
    role: Literal["admin"] = "admin"
    permissions: List[str] = Field(default_factory=list)


User = Annotated[Union[PatientProfile, DoctorProfile, AdminProfile], Field(discriminator="role")]

_user_adapter = TypeAdapter(User)


def parse_user(document: dict) -> User:
    """Build the role variant matching the document's ``role`` tag."""
    return _user_adapter.validate_python(document)


def display_name(user: User) -> str:
    match user:
        case DoctorProfile(name=name):
            return f"Dr. {name}"
        case _:
            return user.name


# ============================================================================
# CLINICAL RECORDS
# ============================================================================

class Appointment(Record):
    patient_id: str
    doctor_id: str
    patient_name: str
    doctor_name: str
    date: date
    time: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class MedicalReport(Record):
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
    report_type: ReportType = ReportType.CONSULTATION
    file_url: Optional[str] = None
    ai_summary: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Notification(Record):
    user_id: str
    title: str
    message: str
    type: NotificationType
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    related_id: Optional[str] = None
    link: Optional[str] = None


# ============================================================================
# DOCTOR FILE STORAGE
# ============================================================================

class Folder(Record):
    name: str
    owner_id: str
    privacy: FolderPrivacy = FolderPrivacy.PRIVATE
    created_at: datetime = Field(default_factory=utcnow)


class DoctorDocument(Record):
    owner_id: str
    name: str
    url: str
    type: str
    size: int = 0
    folder_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
