"""
record stores

one in-memory store per entity, seeded once from a fixture. every call is a
coroutine with a small artificial delay so the stores behave like the remote
api they stand in for. the delay is a simulation detail, latency_scale=0
removes it without changing any results.

contract (same for every entity):
- get_all()        snapshot copy of every record, insertion order kept
- get_by_id(id)    copy of one record, RecordNotFoundError if absent
- create(draft)    new id = highest id ever seen + 1 (1 for an empty store)
- update(id, patch) shallow merge, patch fields win, the rest persist
- delete(id)       removes and returns a copy of the removed record

records going in and coming out are copies, callers can never reach into the
backing list. there is no locking: last write wins.

Repository is the same contract as a Protocol, so a real backend can be
dropped in later without touching the routes.
"""

from __future__ import annotations

import asyncio
import datetime as dt
from collections.abc import Iterable, Mapping
from typing import Any, Generic, Optional, Protocol, TypeVar, Union

from pydantic import BaseModel, ValidationError

from wardview.core.errors import InvalidRecordError, RecordNotFoundError
from wardview.core.logging_config import get_logger
from wardview.schemas.records import (
    Appointment,
    AppointmentPatch,
    Department,
    DepartmentPatch,
    Patient,
    PatientPatch,
    StaffMember,
    StaffPatch,
)
from wardview.schemas.status import (
    DutyStatus,
    parse_appointment_status,
    parse_duty_status,
    parse_patient_status,
    parse_staff_role,
)
from wardview.schemas.views import OccupancyStats

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

Payload = Union[BaseModel, Mapping[str, Any]]

# simulated round trip per operation, in milliseconds
LATENCY_MS: dict[str, int] = {
    "get_all": 300,
    "get_by_id": 200,
    "create": 400,
    "update": 300,
    "delete": 200,
    "query": 250,
}


class Repository(Protocol[RecordT]):
    async def get_all(self) -> list[RecordT]: ...

    async def get_by_id(self, record_id: object) -> RecordT: ...

    async def create(self, draft: Payload) -> RecordT: ...

    async def update(self, record_id: object, patch: Payload) -> RecordT: ...

    async def delete(self, record_id: object) -> RecordT: ...


class RecordStore(Generic[RecordT]):
    entity: str = "Record"
    model: type[RecordT]
    patch_model: type[BaseModel]

    def __init__(self, records: Iterable[Payload] = (), latency_scale: float = 0.0) -> None:
        self._records: list[RecordT] = [self._validate(r) for r in records]
        self._latency_scale = latency_scale
        self._last_id = max((r.id for r in self._records), default=0)

    def __len__(self) -> int:
        return len(self._records)

    # -------------------------
    # helpers
    # -------------------------

    async def _simulate_latency(self, operation: str) -> None:
        if self._latency_scale > 0:
            await asyncio.sleep(LATENCY_MS[operation] * self._latency_scale / 1000.0)

    def _validate(self, data: Payload) -> RecordT:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        return self.model.model_validate(data)

    @staticmethod
    def _copy(record: RecordT) -> RecordT:
        return record.model_copy(deep=True)

    def _index_of(self, record_id: object) -> int:
        try:
            wanted = int(record_id)
        except (TypeError, ValueError):
            wanted = None

        for i, record in enumerate(self._records):
            if record.id == wanted:
                return i

        logger.warning("record_not_found", entity=self.entity, id=record_id)
        raise RecordNotFoundError(self.entity, record_id)

    def _find(self, record_id: object) -> RecordT:
        return self._records[self._index_of(record_id)]

    def _patch_fields(self, patch: Payload) -> dict[str, Any]:
        # a full record works as a patch too, only the fields actually set count
        if not isinstance(patch, BaseModel):
            patch = self.patch_model.model_validate(patch)
        fields = patch.model_dump(exclude_unset=True)
        fields.pop("id", None)
        return fields

    def _select(self, predicate) -> list[RecordT]:
        return [self._copy(r) for r in self._records if predicate(r)]

    # -------------------------
    # crud
    # -------------------------

    async def get_all(self) -> list[RecordT]:
        await self._simulate_latency("get_all")
        return [self._copy(r) for r in self._records]

    async def get_by_id(self, record_id: object) -> RecordT:
        await self._simulate_latency("get_by_id")
        return self._copy(self._find(record_id))

    async def create(self, draft: Payload) -> RecordT:
        await self._simulate_latency("create")

        data = draft.model_dump() if isinstance(draft, BaseModel) else dict(draft)
        data.pop("id", None)
        data.pop("Id", None)

        # ids are never handed out twice, even after the highest one is deleted
        self._last_id = max(self._last_id, max((r.id for r in self._records), default=0)) + 1
        record = self.model.model_validate({**data, "id": self._last_id})

        self._records.append(record)
        logger.info("record_created", entity=self.entity, id=record.id)
        return self._copy(record)

    async def update(self, record_id: object, patch: Payload) -> RecordT:
        await self._simulate_latency("update")

        index = self._index_of(record_id)
        current = self._records[index]
        fields = self._patch_fields(patch)

        try:
            merged = self.model.model_validate({**current.model_dump(), **fields})
        except ValidationError as exc:
            # the stored record stays as it was
            logger.warning("record_update_rejected", entity=self.entity, id=current.id, fields=sorted(fields))
            raise InvalidRecordError(
                self.entity,
                current.id,
                exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc
        self._records[index] = merged
        logger.info("record_updated", entity=self.entity, id=merged.id, fields=sorted(fields))
        return self._copy(merged)

    async def delete(self, record_id: object) -> RecordT:
        await self._simulate_latency("delete")

        index = self._index_of(record_id)
        removed = self._records.pop(index)
        logger.info("record_deleted", entity=self.entity, id=removed.id)
        return self._copy(removed)


# -------------------------
# Entity stores
# -------------------------


class PatientStore(RecordStore[Patient]):
    entity = "Patient"
    model = Patient
    patch_model = PatientPatch

    async def get_by_status(self, status: str) -> list[Patient]:
        await self._simulate_latency("query")
        wanted = parse_patient_status(status)
        return self._select(lambda p: parse_patient_status(p.current_status) == wanted)


class AppointmentStore(RecordStore[Appointment]):
    entity = "Appointment"
    model = Appointment
    patch_model = AppointmentPatch

    async def get_by_patient(self, patient_id: object) -> list[Appointment]:
        await self._simulate_latency("query")
        return self._select(lambda a: a.patient_id == str(patient_id))

    async def get_by_staff(self, staff_id: object) -> list[Appointment]:
        await self._simulate_latency("query")
        return self._select(lambda a: a.staff_id == str(staff_id))

    async def get_by_date_range(self, start: dt.datetime, end: dt.datetime) -> list[Appointment]:
        """Appointments with start <= date_time <= end (both ends inclusive)."""
        await self._simulate_latency("query")
        return self._select(lambda a: start <= a.date_time <= end)

    async def get_by_status(self, status: str) -> list[Appointment]:
        await self._simulate_latency("query")
        wanted = parse_appointment_status(status)
        return self._select(lambda a: parse_appointment_status(a.status) == wanted)

    async def update_status(self, record_id: object, status: str) -> Appointment:
        return await self.update(record_id, {"status": status})


class StaffStore(RecordStore[StaffMember]):
    entity = "Staff member"
    model = StaffMember
    patch_model = StaffPatch

    async def get_by_role(self, role: str) -> list[StaffMember]:
        await self._simulate_latency("query")
        wanted = parse_staff_role(role)
        return self._select(lambda s: parse_staff_role(s.role) == wanted)

    async def get_by_department(self, department: str) -> list[StaffMember]:
        # substring match, "card" finds "Cardiology"
        await self._simulate_latency("query")
        needle = department.casefold()
        return self._select(lambda s: needle in s.department.casefold())

    async def get_on_duty(self, day: Optional[dt.date] = None) -> list[StaffMember]:
        await self._simulate_latency("query")
        day = day or dt.date.today()
        return self._select(lambda s: is_on_duty(s, day))

    async def assign_patient(self, staff_id: object, patient_id: object) -> StaffMember:
        await self._simulate_latency("update")
        member = self._find(staff_id)
        pid = int(patient_id)
        if pid not in member.assigned_patients:
            member.assigned_patients.append(pid)
            logger.info("patient_assigned", staff_id=member.id, patient_id=pid)
        return self._copy(member)

    async def unassign_patient(self, staff_id: object, patient_id: object) -> StaffMember:
        await self._simulate_latency("update")
        member = self._find(staff_id)
        pid = int(patient_id)
        if pid in member.assigned_patients:
            member.assigned_patients = [p for p in member.assigned_patients if p != pid]
            logger.info("patient_unassigned", staff_id=member.id, patient_id=pid)
        return self._copy(member)


def is_on_duty(member: StaffMember, day: dt.date) -> bool:
    return any(
        entry.date == day and parse_duty_status(entry.status) == DutyStatus.on_duty
        for entry in member.schedule
    )


class DepartmentStore(RecordStore[Department]):
    entity = "Department"
    model = Department
    patch_model = DepartmentPatch

    async def update_bed_count(self, record_id: object, total_beds: int, occupied_beds: int) -> Department:
        return await self.update(
            record_id,
            {"total_beds": int(total_beds), "occupied_beds": int(occupied_beds)},
        )

    async def occupancy_stats(self) -> OccupancyStats:
        await self._simulate_latency("query")
        total = sum(d.total_beds for d in self._records)
        occupied = sum(d.occupied_beds for d in self._records)
        rate = (occupied / total * 100) if total > 0 else 0.0
        return OccupancyStats(
            total_beds=total,
            occupied_beds=occupied,
            available_beds=total - occupied,
            occupancy_rate=round(rate, 1),
        )

    async def get_by_occupancy_threshold(self, threshold: float = 80) -> list[Department]:
        await self._simulate_latency("query")
        return self._select(lambda d: bed_occupancy(d) >= threshold)

    async def add_equipment(self, record_id: object, item: str) -> Department:
        await self._simulate_latency("update")
        department = self._find(record_id)
        if item not in department.equipment:
            department.equipment.append(item)
            logger.info("equipment_added", department_id=department.id, item=item)
        return self._copy(department)


def bed_occupancy(department: Department) -> float:
    """occupied / total * 100, and 0 for a department with no beds."""
    if department.total_beds <= 0:
        return 0.0
    return department.occupied_beds / department.total_beds * 100
