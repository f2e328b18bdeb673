# src/modules/doctors/doctors_controller.py
"""Doctor directory routes."""

from typing import List

from fastapi import APIRouter, Depends, Query

from src.auth.dependencies import get_current_user
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.models.entities import User

from . import doctors_service as service
from .schemas import DoctorListResponse

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def _list_response(doctors) -> DoctorListResponse:
    summaries = [service.to_summary(d) for d in doctors]
    return DoctorListResponse(doctors=summaries, total=len(summaries))


@router.get("", response_model=DoctorListResponse)
async def get_doctors(
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """List all doctors, most experienced first."""
    return _list_response(await service.list_doctors(store))


@router.get("/search", response_model=DoctorListResponse)
async def search(
    q: str = Query("", description="Name or specialization fragment"),
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    return _list_response(await service.search_doctors(store, q))


@router.get("/recommended", response_model=DoctorListResponse)
async def recommended(
    specialization: List[str] = Query(default=[]),
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Top doctors for one or more specializations."""
    return _list_response(await service.rank_by_specialization(store, specialization))
