# src/models/models.py

import enum

from sqlalchemy import (
    JSON, Column, DateTime, Index, Integer, String, UniqueConstraint, func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReportType(str, enum.Enum):
    CONSULTATION = "consultation"
    UPLOADED_DOCUMENT = "uploaded_document"


class NotificationType(str, enum.Enum):
    APPOINTMENT = "appointment"
    MEDICAL = "medical"
    SYSTEM = "system"
    MESSAGE = "message"


class FolderPrivacy(str, enum.Enum):
    PRIVATE = "private"
    GLOBAL = "global"


class Urgency(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MessageKind(str, enum.Enum):
    GREETING = "greeting"
    CASUAL = "casual"
    MEDICAL = "medical"


class Collections:
    """Names of the document collections used by the service."""
    USERS = "users"
    APPOINTMENTS = "appointments"
    MEDICAL_REPORTS = "medicalReports"
    NOTIFICATIONS = "notifications"
    FOLDERS = "folders"
    DOCUMENTS = "documents"


# ============================================================================
# DOCUMENT TABLE
# ============================================================================

class StoredDocument(Base):
    """One schemaless record of a named collection."""
    __tablename__ = "documents"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(64), nullable=False)
    doc_id = Column(String(64), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),
        Index("ix_documents_collection", "collection"),
    )

    def to_record(self) -> dict:
        return {**(self.data or {}), "id": self.doc_id}

    def __repr__(self):
        return f"<StoredDocument(collection={self.collection}, doc_id={self.doc_id})>"
