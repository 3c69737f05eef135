"""Tests for the in-memory record stores."""
import datetime as dt
from unittest.mock import MagicMock

import pytest

from wardview.core.errors import InvalidRecordError, RecordNotFoundError
from wardview.schemas.records import AppointmentPatch, Department, PatientDraft
from wardview.services.store import DepartmentStore, PatientStore, bed_occupancy
from wardview.services import store as store_module


def _draft() -> PatientDraft:
    return PatientDraft(
        first_name="Ines",
        last_name="Duarte",
        date_of_birth=dt.date(1979, 5, 17),
        gender="female",
        current_status="stable",
        assigned_room="NEU-410",
        primary_physician="Dr. Priya Nair",
        medical_history=["Epilepsy"],
    )


class TestCrud:
    async def test_get_all_keeps_fixture_order(self, registry):
        patients = await registry.patients.get_all()
        assert [p.id for p in patients] == [1, 2, 3, 4, 5, 6]

    async def test_get_all_returns_copies(self, registry):
        patients = await registry.patients.get_all()
        patients[0].first_name = "Changed"
        patients.pop()

        again = await registry.patients.get_all()
        assert again[0].first_name == "Margaret"
        assert len(again) == 6

    async def test_create_then_get_by_id(self, registry):
        draft = _draft()
        created = await registry.patients.create(draft)

        assert created.id == 7
        fetched = await registry.patients.get_by_id(created.id)
        assert fetched.model_dump(exclude={"id"}) == draft.model_dump()

    async def test_create_ignores_caller_supplied_id(self, registry):
        created = await registry.patients.create({**_draft().model_dump(), "id": 1})
        assert created.id == 7

    async def test_create_on_empty_store_starts_at_one(self):
        store = PatientStore([])
        created = await store.create(_draft())
        assert created.id == 1

    async def test_ids_are_not_reused_after_delete(self, registry):
        await registry.patients.delete(6)
        created = await registry.patients.create(_draft())
        assert created.id == 7

    async def test_get_by_id_coerces_strings(self, registry):
        patient = await registry.patients.get_by_id("3")
        assert patient.first_name == "Sofia"

    @pytest.mark.parametrize("bad_id", [999, "abc", None])
    async def test_get_by_id_missing(self, registry, bad_id):
        with pytest.raises(RecordNotFoundError):
            await registry.patients.get_by_id(bad_id)

    async def test_update_merges_fields(self, registry):
        before = await registry.patients.get_by_id(2)
        updated = await registry.patients.update(2, {"currentStatus": "discharge"})

        assert updated.current_status == "discharge"
        assert updated.model_dump(exclude={"current_status"}) == before.model_dump(exclude={"current_status"})

    async def test_update_with_patch_model(self, registry):
        updated = await registry.appointments.update(1, AppointmentPatch(status="completed", notes="done"))
        assert updated.status == "completed"
        assert updated.notes == "done"
        assert updated.type == "Cardiac consultation"

    async def test_update_missing(self, registry):
        with pytest.raises(RecordNotFoundError, match="Patient with ID 42 not found"):
            await registry.patients.update(42, {"gender": "male"})

    async def test_update_null_required_field_is_rejected(self, registry):
        with pytest.raises(InvalidRecordError) as excinfo:
            await registry.patients.update(1, {"firstName": None})

        assert excinfo.value.record_id == 1
        assert excinfo.value.errors[0]["type"] == "string_type"
        assert (await registry.patients.get_by_id(1)).first_name == "Margaret"

    async def test_delete_removes_record(self, registry):
        removed = await registry.departments.delete(3)
        assert removed.name == "Orthopedics"

        with pytest.raises(RecordNotFoundError):
            await registry.departments.get_by_id(3)
        assert len(await registry.departments.get_all()) == 4

    async def test_delete_missing(self, registry):
        with pytest.raises(RecordNotFoundError):
            await registry.staff.delete(77)

    async def test_simulated_latency_does_not_change_results(self):
        store = PatientStore([{**_draft().model_dump(), "id": 3}], latency_scale=0.01)
        records = await store.get_all()
        assert [p.id for p in records] == [3]


class TestAppointmentQueries:
    async def test_by_patient_and_staff(self, registry):
        assert [a.id for a in await registry.appointments.get_by_patient(1)] == [1, 7]
        assert [a.id for a in await registry.appointments.get_by_staff("1")] == [1, 5, 6]

    async def test_by_status_is_case_insensitive(self, registry):
        pending = await registry.appointments.get_by_status("PENDING")
        assert [a.id for a in pending] == [2, 5, 8, 9]

    async def test_date_range_is_inclusive(self, registry):
        found = await registry.appointments.get_by_date_range(
            dt.datetime(2024, 3, 4, 9, 0), dt.datetime(2024, 3, 5, 8, 0)
        )
        assert [a.id for a in found] == [1, 2, 3]

    async def test_update_status(self, registry):
        updated = await registry.appointments.update_status(2, "confirmed")
        assert updated.status == "confirmed"
        assert (await registry.appointments.get_by_id(2)).status == "confirmed"


class TestStaffQueries:
    async def test_by_role(self, registry):
        doctors = await registry.staff.get_by_role("Doctor")
        assert [s.id for s in doctors] == [1, 2, 4]

    async def test_by_department_substring(self, registry):
        cardio = await registry.staff.get_by_department("card")
        assert [s.id for s in cardio] == [1, 5]

    async def test_on_duty(self, registry):
        on_duty = await registry.staff.get_on_duty(dt.date(2024, 3, 4))
        assert [s.id for s in on_duty] == [1, 2, 4]

    async def test_assign_patient_is_idempotent(self, registry):
        await registry.staff.assign_patient(5, 2)
        member = await registry.staff.assign_patient(5, "2")
        assert member.assigned_patients == [2]

    async def test_unassign_patient(self, registry):
        member = await registry.staff.unassign_patient(1, 5)
        assert member.assigned_patients == [1, 6]

    async def test_unassign_logs_only_on_change(self, registry, monkeypatch):
        fake_logger = MagicMock()
        monkeypatch.setattr(store_module, "logger", fake_logger)

        member = await registry.staff.unassign_patient(1, 4)
        assert member.assigned_patients == [1, 5, 6]
        fake_logger.info.assert_not_called()

        await registry.staff.unassign_patient(1, 5)
        fake_logger.info.assert_called_once_with("patient_unassigned", staff_id=1, patient_id=5)

    async def test_assign_unknown_staff(self, registry):
        with pytest.raises(RecordNotFoundError):
            await registry.staff.assign_patient(99, 1)


class TestDepartmentQueries:
    async def test_occupancy_stats(self, registry):
        stats = await registry.departments.occupancy_stats()
        assert stats.total_beds == 100
        assert stats.occupied_beds == 67
        assert stats.available_beds == 33
        assert stats.occupancy_rate == 67.0

    async def test_occupancy_stats_empty(self):
        stats = await DepartmentStore([]).occupancy_stats()
        assert stats.occupancy_rate == 0.0
        assert stats.total_beds == 0

    async def test_occupancy_threshold(self, registry):
        busy = await registry.departments.get_by_occupancy_threshold(85)
        assert [d.name for d in busy] == ["Emergency"]

    async def test_update_bed_count(self, registry):
        updated = await registry.departments.update_bed_count(4, "20", "10")
        assert (updated.total_beds, updated.occupied_beds) == (20, 10)

    async def test_add_equipment_has_set_semantics(self, registry):
        await registry.departments.add_equipment(4, "Ventilator")
        department = await registry.departments.add_equipment(4, "Ventilator")
        assert department.equipment == ["Incubator", "Nebulizer", "Ventilator"]

    def test_bed_occupancy_without_beds(self):
        empty = Department(id=1, name="Storage", total_beds=0, occupied_beds=0)
        assert bed_occupancy(empty) == 0.0
