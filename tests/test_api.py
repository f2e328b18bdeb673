"""
End-to-end tests through the HTTP layer with the store swapped for the in-memory one.
"""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import InMemoryDocumentStore, make_doctor, save_user
from src.auth.auth_service import create_access_token
from src.common.database.database import get_document_store
from src.main import app
from src.models.entities import AdminProfile, PatientProfile
from src.models.models import Collections


def _auth(user_id, email=None):
    token = create_access_token({"sub": user_id, "email": email}, timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def api_store():
    store = InMemoryDocumentStore()
    await save_user(store, PatientProfile(id="pat-1", email="jane@hospital.test", name="Jane Roe"))
    await save_user(store, make_doctor("doc-1", name="Alan Grant", specialization="Cardiology", experience=12))
    await save_user(store, AdminProfile(id="adm-1", email="admin@hospital.test", name="Ada Admin"))
    return store


@pytest.fixture
def client(api_store):
    async def override():
        return api_store

    app.dependency_overrides[get_document_store] = override
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAuth:

    def test_missing_token(self, client):
        assert client.get("/appointments").status_code in (401, 403)

    def test_bad_token(self, client):
        response = client.get("/appointments", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401

    def test_me_without_profile(self, client):
        response = client.get("/auth/me", headers=_auth("new-user", "new@x.test"))

        assert response.status_code == 200
        assert response.json()["has_profile"] is False

    def test_profile_required_for_protected_routes(self, client):
        response = client.get("/appointments", headers=_auth("new-user"))

        assert response.status_code == 403

    def test_register_then_read_profile(self, client):
        headers = _auth("new-user", "new@x.test")

        created = client.post("/user/profile", json={"name": "Newbie"}, headers=headers)
        profile = client.get("/user/profile", headers=headers)

        assert created.status_code == 201
        assert profile.json()["role"] == "patient"
        assert profile.json()["email"] == "new@x.test"


class TestTriageFlow:

    def test_patient_gets_category_and_doctors(self, client):
        response = client.post(
            "/triage/analyze", json={"symptoms": "chest pain and palpitations"}, headers=_auth("pat-1")
        )

        body = response.json()
        assert response.status_code == 200
        assert body["category"] == "Cardiology"
        assert body["urgency"] == "high"
        assert [d["id"] for d in body["suggested_doctors"]] == ["doc-1"]

    def test_doctors_cannot_use_triage(self, client):
        response = client.post("/triage/analyze", json={"symptoms": "rash"}, headers=_auth("doc-1"))

        assert response.status_code == 403


class TestBookingFlow:

    def test_book_then_cancel(self, client, api_store):
        booked = client.post(
            "/appointments",
            json={"doctor_id": "doc-1", "date": "2025-03-14", "time": "09:30"},
            headers=_auth("pat-1"),
        )
        appointment_id = booked.json()["appointment"]["id"]

        cancelled = client.put(
            f"/appointments/{appointment_id}/status", json={"status": "cancelled"}, headers=_auth("pat-1")
        )
        again = client.put(
            f"/appointments/{appointment_id}/status", json={"status": "completed"}, headers=_auth("doc-1")
        )
        inbox = client.get("/notifications", headers=_auth("doc-1"))

        assert booked.status_code == 201
        assert cancelled.status_code == 200
        assert again.status_code == 400
        assert inbox.json()["unread_count"] == 1

    def test_primary_write_failure_is_503(self, client, api_store):
        api_store.fail_when("insert", Collections.APPOINTMENTS)

        response = client.post(
            "/appointments",
            json={"doctor_id": "doc-1", "date": "2025-03-14", "time": "09:30"},
            headers=_auth("pat-1"),
        )

        assert response.status_code == 503

    def test_invalid_time_is_rejected(self, client):
        response = client.post(
            "/appointments",
            json={"doctor_id": "doc-1", "date": "2025-03-14", "time": "9.30am"},
            headers=_auth("pat-1"),
        )

        assert response.status_code == 422


class TestBroadcast:

    def test_admin_broadcast_to_doctors(self, client, api_store):
        response = client.post(
            "/notifications/broadcast",
            json={"title": "Rota", "message": "New rota is out", "role": "doctor"},
            headers=_auth("adm-1"),
        )

        assert response.status_code == 200
        assert [n["userId"] for n in api_store.records(Collections.NOTIFICATIONS)] == ["doc-1"]

    def test_patients_cannot_broadcast(self, client):
        response = client.post(
            "/notifications/broadcast",
            json={"title": "x", "message": "y", "role": "doctor"},
            headers=_auth("pat-1"),
        )

        assert response.status_code == 403


class TestReportEdits:

    def test_nulling_diagnosis_is_rejected(self, client, api_store):
        created = client.post(
            "/medical-reports",
            json={"patient_id": "pat-1", "diagnosis": "Angina", "prescription": "GTN spray"},
            headers=_auth("doc-1"),
        )
        report_id = created.json()["report"]["id"]

        response = client.put(f"/medical-reports/{report_id}", json={"diagnosis": None}, headers=_auth("doc-1"))

        assert created.status_code == 201
        assert response.status_code == 422
        assert api_store.records(Collections.MEDICAL_REPORTS)[0]["diagnosis"] == "Angina"
