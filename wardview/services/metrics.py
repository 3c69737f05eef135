"""
dashboard + report metrics

plain aggregations over store snapshots. like the enrichment functions these
are pure: same snapshots + same `today` in, same numbers out.
"""

from __future__ import annotations

import calendar as cal
import datetime as dt
import math
from collections.abc import Sequence
from typing import Optional, Union

from wardview.schemas.records import Appointment, Department, Patient, StaffMember
from wardview.schemas.status import (
    AppointmentStatus,
    PatientStatus,
    StaffRole,
    parse_appointment_status,
    parse_patient_status,
    parse_staff_role,
)
from wardview.schemas.views import DashboardView, DepartmentOccupancy, ReportsView
from wardview.services.calendar import local_time, week_start
from wardview.services.enrichment import format_occupancy
from wardview.services.store import bed_occupancy, is_on_duty

DASHBOARD_LIST_SIZE = 5
REPORT_PERIODS = ("week", "month", "quarter", "year")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _percent(part: int, whole: int) -> Union[str, int]:
    # "12.5" style string, or plain 0 when there is nothing to divide by
    if whole <= 0:
        return 0
    return f"{part / whole * 100:.1f}"


def period_bounds(period: str, today: dt.date) -> tuple[dt.date, dt.date]:
    """First and last day (inclusive) of the week / month / quarter / year containing today."""
    if period == "week":
        start = week_start(today)
        return start, start + dt.timedelta(days=6)
    if period == "month":
        last = cal.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last)
    if period == "quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        last_month = first_month + 2
        last = cal.monthrange(today.year, last_month)[1]
        return dt.date(today.year, first_month, 1), dt.date(today.year, last_month, last)
    if period == "year":
        return dt.date(today.year, 1, 1), dt.date(today.year, 12, 31)
    raise ValueError(f"Unknown report period {period!r}, expected one of {REPORT_PERIODS}")


def dashboard_metrics(
    patients: Sequence[Patient],
    appointments: Sequence[Appointment],
    staff: Sequence[StaffMember],
    departments: Sequence[Department],
    today: Optional[dt.date] = None,
) -> DashboardView:
    today = today or dt.date.today()

    critical = sum(1 for p in patients if parse_patient_status(p.current_status) == PatientStatus.critical)
    today_appointments = sum(1 for a in appointments if local_time(a.date_time).date() == today)
    on_duty = sum(1 for s in staff if is_on_duty(s, today))

    recent = sorted(
        (p for p in patients if p.admission_date is not None),
        key=lambda p: p.admission_date,
        reverse=True,
    )[:DASHBOARD_LIST_SIZE]

    open_statuses = {AppointmentStatus.pending, AppointmentStatus.confirmed}
    upcoming = sorted(
        (a for a in appointments if parse_appointment_status(a.status) in open_statuses),
        key=lambda a: local_time(a.date_time),
    )[:DASHBOARD_LIST_SIZE]

    rates = [bed_occupancy(d) for d in departments]
    average = _round_half_up(sum(rates) / len(rates)) if rates else 0

    return DashboardView(
        total_patients=len(patients),
        critical_patients=critical,
        today_appointments=today_appointments,
        staff_on_duty=on_duty,
        staff_off_duty=len(staff) - on_duty,
        average_occupancy=average,
        recent_patients=recent,
        upcoming_appointments=upcoming,
        department_occupancy=[
            DepartmentOccupancy(
                id=d.id,
                name=d.name,
                total_beds=d.total_beds,
                occupied_beds=d.occupied_beds,
                occupancy_rate=format_occupancy(d),
            )
            for d in departments
        ],
    )


def report_metrics(
    patients: Sequence[Patient],
    appointments: Sequence[Appointment],
    staff: Sequence[StaffMember],
    departments: Sequence[Department],
    period: str = "month",
    today: Optional[dt.date] = None,
) -> ReportsView:
    today = today or dt.date.today()
    start, end = period_bounds(period, today)

    patient_statuses = [parse_patient_status(p.current_status) for p in patients]
    distribution = {
        status.value: patient_statuses.count(status)
        for status in PatientStatus
        if status is not PatientStatus.unknown
    }
    admitted = sum(
        1 for p in patients if p.admission_date is not None and start <= p.admission_date <= end
    )

    appointment_statuses = [parse_appointment_status(a.status) for a in appointments]
    completed = appointment_statuses.count(AppointmentStatus.completed)
    cancelled = appointment_statuses.count(AppointmentStatus.cancelled)

    roles = [parse_staff_role(s.role) for s in staff]

    total_beds = sum(d.total_beds for d in departments)
    occupied_beds = sum(d.occupied_beds for d in departments)

    return ReportsView(
        period=period,
        period_start=start,
        period_end=end,
        total_patients=len(patients),
        critical_patients=distribution[PatientStatus.critical.value],
        admitted_in_period=admitted,
        status_distribution=distribution,
        total_appointments=len(appointments),
        completed_appointments=completed,
        cancelled_appointments=cancelled,
        appointment_completion_rate=_percent(completed, len(appointments)),
        total_staff=len(staff),
        doctors_count=roles.count(StaffRole.doctor),
        nurses_count=roles.count(StaffRole.nurse),
        total_beds=total_beds,
        occupied_beds=occupied_beds,
        average_occupancy=_percent(occupied_beds, total_beds),
    )
