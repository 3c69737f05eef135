"""
page views

one endpoint per dashboard page. each one does the same dance:

1) load every store the page needs concurrently (load_batch, all-or-nothing)
2) enrich the raw records
3) filter and/or lay out the result
4) return a view model

if the batch fails the client gets a 503 with retry=true and no partial data
(see api/handlers.py). tab counts are always computed over the unfiltered
collection, filters only narrow the list.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.records import Patient
from wardview.schemas.views import (
    AppointmentListView,
    CalendarDay,
    CalendarView,
    DashboardView,
    DepartmentListView,
    PatientListView,
    ReportsView,
    StaffListView,
)
from wardview.services.calendar import layout_week, shift_week
from wardview.services.enrichment import enrich_appointments, enrich_departments, enrich_staff
from wardview.services.loader import load_batch
from wardview.services.metrics import REPORT_PERIODS, dashboard_metrics, report_metrics
from wardview.services.registration import RegistrationForm, to_patient_draft
from wardview.services.search import filter_records, filter_staff, status_counts

router = APIRouter(prefix="/views")


@router.get("/dashboard", response_model=DashboardView)
async def dashboard(registry: StoreRegistry = Depends(get_registry)):
    data = await load_batch(
        "dashboard",
        patients=registry.patients.get_all(),
        appointments=registry.appointments.get_all(),
        staff=registry.staff.get_all(),
        departments=registry.departments.get_all(),
    )
    return dashboard_metrics(**data)


@router.get("/reports", response_model=ReportsView)
async def reports(
    period: str = Query("month", pattern="^(" + "|".join(REPORT_PERIODS) + ")$"),
    registry: StoreRegistry = Depends(get_registry),
):
    data = await load_batch(
        "reports",
        patients=registry.patients.get_all(),
        appointments=registry.appointments.get_all(),
        staff=registry.staff.get_all(),
        departments=registry.departments.get_all(),
    )
    return report_metrics(**data, period=period)


@router.get("/patients", response_model=PatientListView)
async def patients_page(
    search: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    registry: StoreRegistry = Depends(get_registry),
):
    data = await load_batch("patients", patients=registry.patients.get_all())
    patients = data["patients"]
    return PatientListView(
        patients=filter_records(patients, "patient", search, status_filter),
        status_counts=status_counts(patients, "patient"),
        total=len(patients),
    )


@router.post("/patients/register", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def register_patient(form: RegistrationForm, registry: StoreRegistry = Depends(get_registry)):
    """Validates a registration form and stores the new patient. 422 with per-field errors otherwise."""
    return await registry.patients.create(to_patient_draft(form))


@router.get("/appointments", response_model=AppointmentListView)
async def appointments_page(
    search: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    registry: StoreRegistry = Depends(get_registry),
):
    data = await load_batch(
        "appointments",
        appointments=registry.appointments.get_all(),
        patients=registry.patients.get_all(),
        staff=registry.staff.get_all(),
    )
    enriched = enrich_appointments(data["appointments"], data["patients"], data["staff"])
    return AppointmentListView(
        appointments=filter_records(enriched, "appointment", search, status_filter),
        status_counts=status_counts(enriched, "appointment"),
        total=len(enriched),
    )


@router.get("/appointments/calendar", response_model=CalendarView)
async def appointments_calendar(
    anchor: Optional[dt.date] = None,
    weeks: int = 0,
    registry: StoreRegistry = Depends(get_registry),
):
    """
    Week grid for the calendar tab. `anchor` defaults to today, `weeks` moves
    the anchor by that many weeks (-1 = previous week).
    """
    today = dt.date.today()
    data = await load_batch(
        "appointments",
        appointments=registry.appointments.get_all(),
        patients=registry.patients.get_all(),
        staff=registry.staff.get_all(),
    )
    enriched = enrich_appointments(data["appointments"], data["patients"], data["staff"])
    week = layout_week(enriched, shift_week(anchor or today, weeks), today=today)

    return CalendarView(
        week_start=week.week_start,
        week_end=week.week_end,
        slots=list(week.slots),
        days=[
            CalendarDay(
                date=day.date,
                weekday=day.weekday,
                is_today=day.is_today,
                appointment_count=day.appointment_count,
                appointments=day.appointments,
            )
            for day in week.days
        ],
        cells=week.cells,
        off_grid=[a.id for a in week.off_grid],
    )


@router.get("/staff", response_model=StaffListView)
async def staff_page(
    search: Optional[str] = None,
    role: str = "all",
    status_filter: str = Query("all", alias="status"),
    registry: StoreRegistry = Depends(get_registry),
):
    data = await load_batch(
        "staff",
        staff=registry.staff.get_all(),
        patients=registry.patients.get_all(),
    )
    enriched = enrich_staff(data["staff"], data["patients"])
    return StaffListView(
        staff=filter_staff(enriched, search, role, status_filter),
        role_counts=status_counts(enriched, "staff_role"),
        status_counts=status_counts(enriched, "staff_duty"),
        total=len(enriched),
    )


@router.get("/departments", response_model=DepartmentListView)
async def departments_page(search: Optional[str] = None, registry: StoreRegistry = Depends(get_registry)):
    data = await load_batch(
        "department",
        departments=registry.departments.get_all(),
        staff=registry.staff.get_all(),
        patients=registry.patients.get_all(),
        occupancy=registry.departments.occupancy_stats(),
    )
    enriched = enrich_departments(data["departments"], data["staff"], data["patients"])
    return DepartmentListView(
        departments=filter_records(enriched, "department", search),
        occupancy=data["occupancy"],
        total=len(enriched),
    )
