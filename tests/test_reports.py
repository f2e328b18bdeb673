"""
Tests for medical reports: authoring, visibility and edits.
"""
import pytest
from pydantic import ValidationError

from src.models.models import Collections
from src.modules.reports import reports_service as service
from src.modules.reports.schemas import ReportCreateRequest, ReportUpdateRequest


@pytest.fixture
async def report(store, doctor, patient):
    result = await service.create_report(store, doctor, ReportCreateRequest(
        patient_id=patient.id, diagnosis="Hypertension", prescription="Amlodipine 5mg"
    ))
    return result.report


class TestCreate:

    async def test_creates_and_notifies_patient(self, store, report, patient):
        assert report.patient_name == "Jane Roe"
        assert report.doctor_name == "Alan Grant"
        (notice,) = store.records(Collections.NOTIFICATIONS)
        assert notice["userId"] == patient.id
        assert notice["relatedId"] == report.id

    async def test_target_must_be_a_patient(self, store, doctor, other_doctor):
        result = await service.create_report(store, doctor, ReportCreateRequest(
            patient_id=other_doctor.id, diagnosis="x"
        ))

        assert result.success is False
        assert store.records(Collections.MEDICAL_REPORTS) == []


class TestVisibility:

    async def test_patient_doctor_and_admin(self, store, report, patient, other_patient, doctor, other_doctor, admin):
        assert await service.get_report(store, patient, report.id) is not None
        assert await service.get_report(store, doctor, report.id) is not None
        assert await service.get_report(store, admin, report.id) is not None
        assert await service.get_report(store, other_patient, report.id) is None
        assert await service.get_report(store, other_doctor, report.id) is None

    async def test_patient_filter_is_ignored_for_patients(self, store, report, other_patient):
        result = await service.get_reports(store, other_patient, patient_id=report.patient_id)

        assert result.total == 0


class TestUpdate:

    async def test_author_edits_only_given_fields(self, store, report, doctor):
        result = await service.update_report(store, doctor, report.id, ReportUpdateRequest(notes="Recheck in 2 weeks"))

        assert result.report.notes == "Recheck in 2 weeks"
        (stored,) = store.records(Collections.MEDICAL_REPORTS)
        assert stored["notes"] == "Recheck in 2 weeks"
        assert stored["diagnosis"] == "Hypertension"

    async def test_other_doctor_cannot_edit(self, store, report, other_doctor):
        assert await service.update_report(store, other_doctor, report.id, ReportUpdateRequest(notes="x")) is None

    async def test_cleared_optional_field_is_stored_as_null(self, store, doctor, patient):
        created = await service.create_report(store, doctor, ReportCreateRequest(
            patient_id=patient.id, diagnosis="Migraine", notes="old"
        ))

        result = await service.update_report(store, doctor, created.report.id, ReportUpdateRequest(notes=None))

        assert result.report.notes is None
        stored = await store.find_one(Collections.MEDICAL_REPORTS, created.report.id)
        assert stored["notes"] is None
        assert stored["diagnosis"] == "Migraine"

    @pytest.mark.parametrize("field", ["diagnosis", "prescription"])
    def test_required_fields_cannot_be_nulled(self, field):
        with pytest.raises(ValidationError):
            ReportUpdateRequest.model_validate({field: None})

    def test_required_fields_may_be_omitted(self):
        assert ReportUpdateRequest.model_validate({"notes": "x"}).diagnosis is None
