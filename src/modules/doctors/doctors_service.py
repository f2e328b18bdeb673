# src/modules/doctors/doctors_service.py
"""Doctor lookup and ranking."""

import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from src.common.config import settings
from src.common.store.document_store import DocumentStore, StoreError
from src.models.entities import DoctorProfile
from src.models.models import Collections, UserRole

from .schemas import DoctorSummary

logger = logging.getLogger(__name__)


def _to_doctors(documents: Iterable[dict]) -> List[DoctorProfile]:
    doctors = []
    for document in documents:
        try:
            doctors.append(DoctorProfile.model_validate(document))
        except ValidationError as e:
            logger.warning("Skipping malformed doctor record %s: %s", document.get("id"), e)
    return doctors


def _experience(doctor: DoctorProfile) -> int:
    return doctor.experience_years or 0


def to_summary(doctor: DoctorProfile) -> DoctorSummary:
    return DoctorSummary(
        id=doctor.id,
        name=doctor.name,
        specialization=doctor.specialization,
        experience_years=_experience(doctor),
        qualification=doctor.qualification,
        consultation_fee_minor_units=doctor.consultation_fee_minor_units,
        rating=doctor.rating
    )


async def _fetch_doctors(store: DocumentStore, limit: Optional[int], specialization: Optional[str] = None) -> List[DoctorProfile]:
    """Fetch doctors, logging and swallowing lookup failures."""
    filters = {"role": UserRole.DOCTOR.value}
    if specialization is not None:
        filters["specialization"] = specialization
    try:
        documents = await store.find_many(Collections.USERS, filters, limit=limit)
    except StoreError:
        logger.exception("Error fetching doctors (specialization=%s)", specialization)
        return []
    return _to_doctors(documents)


async def rank_by_specialization(
    store: DocumentStore,
    categories: List[str],
    limit_per_category: Optional[int] = None,
    top_n: Optional[int] = None
) -> List[DoctorProfile]:
    """
    Recommend the most experienced doctors for the given specializations.

    Falls back to doctors of any specialization when none match. Duplicates
    keep their first occurrence and equal experience keeps fetch order.
    """
    limit_per_category = settings.DOCTOR_FETCH_LIMIT if limit_per_category is None else limit_per_category
    top_n = settings.DOCTOR_TOP_N if top_n is None else top_n

    doctors: List[DoctorProfile] = []
    for category in categories:
        doctors.extend(await _fetch_doctors(store, limit_per_category, category))

    if not doctors:
        doctors = await _fetch_doctors(store, limit_per_category)

    seen = set()
    unique = []
    for doctor in doctors:
        if doctor.id in seen:
            continue
        seen.add(doctor.id)
        unique.append(doctor)

    # sorted() is stable
    return sorted(unique, key=_experience, reverse=True)[:top_n]


async def list_doctors(store: DocumentStore) -> List[DoctorProfile]:
    """All doctors, most experienced first."""
    doctors = await _fetch_doctors(store, None)
    return sorted(doctors, key=_experience, reverse=True)


async def search_doctors(store: DocumentStore, term: str) -> List[DoctorProfile]:
    """Case-insensitive match on name or specialization."""
    needle = term.strip().lower()
    doctors = await list_doctors(store)
    if not needle:
        return doctors
    return [
        doctor for doctor in doctors
        if needle in doctor.name.lower() or needle in doctor.specialization.lower()
    ]
