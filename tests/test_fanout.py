"""
Tests for notification fan-out: recipients, wording and partial failure.
"""
from datetime import date

import pytest

from conftest import make_doctor, save_user
from src.models.entities import Appointment, MedicalReport, PatientProfile
from src.models.models import AppointmentStatus, Collections, NotificationType, UserRole
from src.modules.notifications import fanout
from src.modules.notifications.events import (
    AppointmentStatusChanged, NewAppointment, NewMedicalReport,
    NewUserRegistered, RoleBroadcast,
)


@pytest.fixture
def appointment():
    return Appointment(
        id="apt-1",
        patient_id="pat-1",
        doctor_id="doc-1",
        patient_name="Jane Roe",
        doctor_name="Alan Grant",
        date=date(2025, 3, 14),
        time="09:30",
    )


class TestNewAppointment:

    async def test_doctor_and_patient_each_get_one(self, store, appointment):
        result = await fanout.notify(store, NewAppointment(appointment=appointment))

        notifications = store.records(Collections.NOTIFICATIONS)
        assert len(result.delivered) == 2
        assert result.failed == []
        assert len(notifications) == 2

        by_user = {n["userId"]: n for n in notifications}
        doctor_notice, patient_notice = by_user["doc-1"], by_user["pat-1"]
        assert doctor_notice["title"] == "New Appointment"
        assert doctor_notice["message"] == "You have a new appointment with Jane Roe on 3/14/2025 at 09:30"
        assert doctor_notice["link"] == "/doctor/appointments"
        assert doctor_notice["relatedId"] == "apt-1"
        assert doctor_notice["read"] is False

        assert patient_notice["title"] == "Appointment Confirmation"
        assert patient_notice["message"] == "Your appointment with Dr. Alan Grant is confirmed for 3/14/2025 at 09:30"
        assert patient_notice["link"] == "/patient/appointments"
        assert patient_notice["type"] == NotificationType.APPOINTMENT.value

    async def test_failed_write_does_not_stop_the_other(self, store, appointment):
        store.fail_when("insert", Collections.NOTIFICATIONS, lambda record: record["userId"] == "doc-1")

        result = await fanout.notify(store, NewAppointment(appointment=appointment))

        assert [f.user_id for f in result.failed] == ["doc-1"]
        assert len(result.delivered) == 1
        assert [n["userId"] for n in store.records(Collections.NOTIFICATIONS)] == ["pat-1"]


class TestStatusChange:

    @pytest.mark.parametrize("status, expected", [
        (AppointmentStatus.COMPLETED,
         "Your appointment with Alan Grant on 3/14/2025 has been marked as completed"),
        (AppointmentStatus.CANCELLED,
         "Your appointment with Alan Grant on 3/14/2025 has been cancelled"),
        (AppointmentStatus.SCHEDULED,
         "Your appointment status has been updated from cancelled to scheduled"),
    ])
    async def test_patient_is_told(self, store, appointment, status, expected):
        appointment.status = status
        previous = AppointmentStatus.CANCELLED if status == AppointmentStatus.SCHEDULED else AppointmentStatus.SCHEDULED

        await fanout.notify(store, AppointmentStatusChanged(
            appointment=appointment, previous_status=previous
        ))

        (notice,) = store.records(Collections.NOTIFICATIONS)
        assert notice["userId"] == "pat-1"
        assert notice["title"] == "Appointment Update"
        assert notice["message"] == expected


class TestMedicalReport:

    async def test_patient_is_told(self, store):
        report = MedicalReport(
            id="rep-1", patient_id="pat-1", doctor_id="doc-1",
            patient_name="Jane Roe", doctor_name="Alan Grant",
            diagnosis="Flu", prescription="Rest",
        )

        await fanout.notify(store, NewMedicalReport(report=report))

        (notice,) = store.records(Collections.NOTIFICATIONS)
        assert notice["title"] == "New Medical Report"
        assert notice["message"] == "Dr. Alan Grant has created a new medical report for you"
        assert notice["type"] == NotificationType.MEDICAL.value
        assert notice["link"] == "/patient/medical-reports"


class TestRoleBroadcast:

    async def test_only_role_members_receive_it(self, store):
        for i in range(3):
            await save_user(store, make_doctor(f"doc-{i}"))
        for i in range(5):
            await save_user(store, PatientProfile(id=f"pat-{i}", email=f"p{i}@x.test", name=f"P{i}"))

        result = await fanout.notify(store, RoleBroadcast(
            title="Staff meeting", message="Friday at noon", role=UserRole.DOCTOR
        ))

        recipients = sorted(n["userId"] for n in store.records(Collections.NOTIFICATIONS))
        assert recipients == ["doc-0", "doc-1", "doc-2"]
        assert len(result.delivered) == 3

    async def test_empty_role_sends_nothing(self, store):
        result = await fanout.notify(store, RoleBroadcast(title="t", message="m", role=UserRole.ADMIN))

        assert result.delivered == [] and result.failed == []

    async def test_recipient_lookup_failure_sends_nothing(self, store):
        await save_user(store, make_doctor("doc-0"))
        store.fail_when("find_many", Collections.USERS)

        result = await fanout.notify(store, RoleBroadcast(title="t", message="m", role=UserRole.DOCTOR))

        assert result.delivered == []
        assert store.records(Collections.NOTIFICATIONS) == []


class TestNewUserRegistered:

    async def test_admins_are_told(self, store):
        user = PatientProfile(id="pat-9", email="new@x.test", name="Newbie")

        await fanout.notify(store, NewUserRegistered(user=user, admin_ids=["adm-1", "adm-2"]))

        notices = store.records(Collections.NOTIFICATIONS)
        assert sorted(n["userId"] for n in notices) == ["adm-1", "adm-2"]
        assert notices[0]["message"] == "Newbie has registered as a patient"
        assert notices[0]["link"] == "/admin/settings"
