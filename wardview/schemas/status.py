"""
status domains

every place that compares a status string (filters, tab counts, dashboard
metrics, on-duty checks) goes through one of the parse_* functions here, so
"On Duty", "on duty", "onduty" and "ON_DUTY" all land on the same enum member.

anything we do not recognise becomes `unknown` instead of raising.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, TypeVar


class PatientStatus(str, Enum):
    critical = "critical"
    urgent = "urgent"
    stable = "stable"
    observation = "observation"
    discharge = "discharge"
    unknown = "unknown"


class AppointmentStatus(str, Enum):
    confirmed = "confirmed"
    pending = "pending"
    cancelled = "cancelled"
    completed = "completed"
    unknown = "unknown"


class StaffRole(str, Enum):
    doctor = "doctor"
    nurse = "nurse"
    technician = "technician"
    administrator = "administrator"
    unknown = "unknown"


class DutyStatus(str, Enum):
    on_duty = "on duty"
    off_duty = "off duty"
    on_break = "break"
    emergency = "emergency"
    unknown = "unknown"


E = TypeVar("E", bound=Enum)


def normalize(value: Optional[str]) -> str:
    """Case-folds and drops spaces, underscores and hyphens."""
    if value is None:
        return ""
    return "".join(ch for ch in str(value).casefold() if ch not in " _-")


def _parse(enum_cls: type[E], value: Optional[str]) -> E:
    key = normalize(value)
    for member in enum_cls:
        if normalize(member.value) == key:
            return member
    return enum_cls["unknown"]


def parse_patient_status(value: Optional[str]) -> PatientStatus:
    return _parse(PatientStatus, value)


def parse_appointment_status(value: Optional[str]) -> AppointmentStatus:
    return _parse(AppointmentStatus, value)


def parse_staff_role(value: Optional[str]) -> StaffRole:
    return _parse(StaffRole, value)


def parse_duty_status(value: Optional[str]) -> DutyStatus:
    return _parse(DutyStatus, value)
