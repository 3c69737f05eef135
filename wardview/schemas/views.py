"""
view schemas

the shapes the dashboard pages consume: enriched records (records plus
joined display fields) and one response model per page.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from pydantic import Field

from wardview.schemas.records import (
    Appointment,
    Department,
    Patient,
    RecordModel,
    StaffMember,
)


# -------------------------
# Enriched records
# -------------------------


class EnrichedAppointment(Appointment):
    patient_name: str
    patient_phone: str = ""
    staff_name: str
    staff_role: str = ""


class EnrichedStaffMember(StaffMember):
    assigned_patient_names: list[str] = Field(default_factory=list)
    current_status: str = "off duty"


class EnrichedDepartment(Department):
    # "70.0" style string, or the number 0 when the department has no beds
    occupancy_rate: Union[str, int]
    available_beds: int
    department_staff: list[StaffMember] = Field(default_factory=list)
    department_patients: list[Patient] = Field(default_factory=list)
    staff_on_duty: int = 0
    total_staff: int = 0


# -------------------------
# List pages
# -------------------------


class PatientListView(RecordModel):
    patients: list[Patient]
    # tab counts, always computed over the unfiltered collection
    status_counts: dict[str, int]
    total: int


class AppointmentListView(RecordModel):
    appointments: list[EnrichedAppointment]
    status_counts: dict[str, int]
    total: int


class StaffListView(RecordModel):
    staff: list[EnrichedStaffMember]
    role_counts: dict[str, int]
    status_counts: dict[str, int]
    total: int


class OccupancyStats(RecordModel):
    total_beds: int
    occupied_beds: int
    available_beds: int
    occupancy_rate: float


class DepartmentListView(RecordModel):
    departments: list[EnrichedDepartment]
    occupancy: OccupancyStats
    total: int


# -------------------------
# Calendar
# -------------------------


class CalendarDay(RecordModel):
    date: dt.date
    weekday: str
    is_today: bool
    appointment_count: int
    # every appointment that day, time-of-day ascending, on-grid or not
    appointments: list[EnrichedAppointment]


class CalendarView(RecordModel):
    week_start: dt.date
    week_end: dt.date
    slots: list[str]
    days: list[CalendarDay]
    # cells[day_index][slot_index]
    cells: list[list[list[EnrichedAppointment]]]
    # ids of appointments that fell this week but not on a half-hour boundary
    off_grid: list[int] = Field(default_factory=list)


# -------------------------
# Dashboard / reports
# -------------------------


class DepartmentOccupancy(RecordModel):
    id: int = Field(alias="Id")
    name: str
    total_beds: int
    occupied_beds: int
    occupancy_rate: Union[str, int]


class DashboardView(RecordModel):
    total_patients: int
    critical_patients: int
    today_appointments: int
    staff_on_duty: int
    staff_off_duty: int
    average_occupancy: int
    recent_patients: list[Patient]
    upcoming_appointments: list[Appointment]
    department_occupancy: list[DepartmentOccupancy]


class ReportsView(RecordModel):
    period: str
    period_start: dt.date
    period_end: dt.date

    total_patients: int
    critical_patients: int
    admitted_in_period: int
    status_distribution: dict[str, int]

    total_appointments: int
    completed_appointments: int
    cancelled_appointments: int
    appointment_completion_rate: Union[str, int]

    total_staff: int
    doctors_count: int
    nurses_count: int

    total_beds: int
    occupied_beds: int
    average_occupancy: Union[str, int]


class HealthResponse(RecordModel):
    status: str
    app: str
    environment: str
    record_counts: Optional[dict[str, int]] = None
