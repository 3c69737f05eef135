"""
record schemas

the four stored entities (patient, staff member, appointment, department)
plus the draft / patch shapes used for create and update.

field names are snake_case in python and camelCase on the wire, because the
bundled fixtures (and the dashboard front end) speak camelCase. ids are the
odd one out, they are spelled "Id" in the fixtures.

status-like fields are stored as the raw string that came in. comparisons go
through the parse_* helpers in schemas/status.py instead of ad hoc lowercasing.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # fixtures and clients send foreign keys as either "3" or 3
        coerce_numbers_to_str=True,
    )


class ContactInfo(RecordModel):
    phone: str = ""
    email: str = ""


class ScheduleEntry(RecordModel):
    date: dt.date
    status: str


# -------------------------
# Patients
# -------------------------


class PatientDraft(RecordModel):
    first_name: str
    last_name: str
    date_of_birth: dt.date
    gender: str
    current_status: str
    assigned_room: str = ""
    primary_physician: str = ""
    admission_date: Optional[dt.date] = None
    medical_history: list[str] = Field(default_factory=list)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    # intake details collected at registration, free text
    address: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    blood_type: str = ""
    allergies: str = ""
    medications: str = ""
    insurance_provider: str = ""


class Patient(PatientDraft):
    id: int = Field(alias="Id")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PatientPatch(RecordModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[dt.date] = None
    gender: Optional[str] = None
    current_status: Optional[str] = None
    assigned_room: Optional[str] = None
    primary_physician: Optional[str] = None
    admission_date: Optional[dt.date] = None
    medical_history: Optional[list[str]] = None
    contact_info: Optional[ContactInfo] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    insurance_provider: Optional[str] = None


# -------------------------
# Staff
# -------------------------


class StaffDraft(RecordModel):
    name: str
    role: str
    department: str
    shift: str = ""
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    # advisory back-references to Patient ids, never validated
    assigned_patients: list[int] = Field(default_factory=list)
    # at most one entry per date
    schedule: list[ScheduleEntry] = Field(default_factory=list)


class StaffMember(StaffDraft):
    id: int = Field(alias="Id")


class StaffPatch(RecordModel):
    name: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    shift: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    assigned_patients: Optional[list[int]] = None
    schedule: Optional[list[ScheduleEntry]] = None


# -------------------------
# Appointments
# -------------------------


class AppointmentDraft(RecordModel):
    # string typed in storage, compared numerically against Patient.id / StaffMember.id
    patient_id: str
    staff_id: str
    date_time: dt.datetime
    duration: int = Field(default=30, ge=0)
    type: str
    department: str
    status: str
    notes: str = ""


class Appointment(AppointmentDraft):
    id: int = Field(alias="Id")


class AppointmentPatch(RecordModel):
    patient_id: Optional[str] = None
    staff_id: Optional[str] = None
    date_time: Optional[dt.datetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    type: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


# -------------------------
# Departments
# -------------------------


class DepartmentDraft(RecordModel):
    name: str
    # occupied <= total is expected, not enforced
    total_beds: int = Field(ge=0)
    occupied_beds: int = Field(ge=0)
    equipment: list[str] = Field(default_factory=list)
    head: str = ""


class Department(DepartmentDraft):
    id: int = Field(alias="Id")


class DepartmentPatch(RecordModel):
    name: Optional[str] = None
    total_beds: Optional[int] = Field(default=None, ge=0)
    occupied_beds: Optional[int] = Field(default=None, ge=0)
    equipment: Optional[list[str]] = None
    head: Optional[str] = None
