"""
enrichment pipeline

joins raw records across stores by foreign key and attaches display fields:
- appointments get the patient name + phone and the staff name + role
- staff get their assigned patients' names and today's duty status
- departments get bed metrics plus the staff and patients that belong to them

everything here is a pure function of its inputs (plus an explicit `today`).
inputs are never mutated, and enriching an already enriched snapshot gives the
same result as enriching the raw one.

foreign keys are advisory. an id that does not resolve degrades to a
placeholder label like "Patient #9999", it is never an error.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import Optional, Union

from wardview.core.logging_config import get_logger
from wardview.schemas.records import Appointment, Department, Patient, StaffMember
from wardview.schemas.views import EnrichedAppointment, EnrichedDepartment, EnrichedStaffMember
from wardview.services.store import bed_occupancy, is_on_duty

logger = get_logger(__name__)

DEFAULT_DUTY_STATUS = "off duty"
ROOM_PREFIX_LENGTH = 3


def _as_id(value: object) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def patient_label(patient_id: object, patients_by_id: dict[int, Patient]) -> str:
    patient = patients_by_id.get(_as_id(patient_id))
    return patient.display_name if patient else f"Patient #{patient_id}"


def staff_label(staff_id: object, staff_by_id: dict[int, StaffMember]) -> str:
    member = staff_by_id.get(_as_id(staff_id))
    return member.name if member else f"Staff #{staff_id}"


# -------------------------
# Appointments
# -------------------------


def enrich_appointments(
    appointments: Iterable[Appointment],
    patients: Iterable[Patient],
    staff: Iterable[StaffMember],
) -> list[EnrichedAppointment]:
    patients_by_id = {p.id: p for p in patients}
    staff_by_id = {s.id: s for s in staff}

    enriched: list[EnrichedAppointment] = []
    for appointment in appointments:
        patient = patients_by_id.get(_as_id(appointment.patient_id))
        member = staff_by_id.get(_as_id(appointment.staff_id))

        enriched.append(
            EnrichedAppointment.model_validate(
                {
                    **appointment.model_dump(),
                    "patient_name": patient_label(appointment.patient_id, patients_by_id),
                    "patient_phone": patient.contact_info.phone if patient else "",
                    "staff_name": staff_label(appointment.staff_id, staff_by_id),
                    "staff_role": member.role if member else "",
                }
            )
        )
    return enriched


# -------------------------
# Staff
# -------------------------


def duty_status_on(member: StaffMember, day: dt.date) -> str:
    """Status of the schedule entry for `day`, "off duty" when there is none."""
    for entry in member.schedule:
        if entry.date == day:
            return entry.status
    return DEFAULT_DUTY_STATUS


def enrich_staff(
    staff: Iterable[StaffMember],
    patients: Iterable[Patient],
    today: Optional[dt.date] = None,
) -> list[EnrichedStaffMember]:
    today = today or dt.date.today()
    patients_by_id = {p.id: p for p in patients}

    return [
        EnrichedStaffMember.model_validate(
            {
                **member.model_dump(),
                "assigned_patient_names": [
                    patient_label(pid, patients_by_id) for pid in member.assigned_patients
                ],
                "current_status": duty_status_on(member, today),
            }
        )
        for member in staff
    ]


# -------------------------
# Departments
# -------------------------


def format_occupancy(department: Department) -> Union[str, int]:
    # one decimal as a string ("70.0"), or plain 0 when there are no beds
    if department.total_beds <= 0:
        return 0
    return f"{bed_occupancy(department):.1f}"


def room_prefix_for(department: Department) -> str:
    """
    Room codes are assumed to start with the first three letters of the
    department name, upper-cased (CAR-301 for Cardiology). This is a guess,
    not a real foreign key.
    """
    return department.name[:ROOM_PREFIX_LENGTH].upper()


def _warn_on_shared_prefixes(departments: Sequence[Department]) -> None:
    by_prefix: dict[str, list[str]] = defaultdict(list)
    for d in departments:
        by_prefix[room_prefix_for(d)].append(d.name)

    for prefix, names in by_prefix.items():
        if len(names) > 1:
            logger.warning("ambiguous_room_prefix", prefix=prefix, departments=names)


def enrich_departments(
    departments: Iterable[Department],
    staff: Iterable[StaffMember],
    patients: Iterable[Patient],
    today: Optional[dt.date] = None,
) -> list[EnrichedDepartment]:
    today = today or dt.date.today()
    departments = list(departments)
    # enriched staff/patients go back to their plain record shape here
    staff = [StaffMember.model_validate(s.model_dump()) for s in staff]
    patients = [Patient.model_validate(p.model_dump()) for p in patients]

    _warn_on_shared_prefixes(departments)

    enriched: list[EnrichedDepartment] = []
    for department in departments:
        prefix = room_prefix_for(department)
        members = [s for s in staff if s.department == department.name]
        residents = [p for p in patients if prefix and p.assigned_room.startswith(prefix)]

        enriched.append(
            EnrichedDepartment.model_validate(
                {
                    **department.model_dump(),
                    "occupancy_rate": format_occupancy(department),
                    "available_beds": department.total_beds - department.occupied_beds,
                    "department_staff": [s.model_dump() for s in members],
                    "department_patients": [p.model_dump() for p in residents],
                    "staff_on_duty": sum(1 for s in members if is_on_duty(s, today)),
                    "total_staff": len(members),
                }
            )
        )
    return enriched
