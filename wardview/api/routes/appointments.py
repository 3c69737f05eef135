"""
appointment routes

crud plus the lookups the appointments page and the patient / staff detail
panels use. patient and staff ids are matched as strings, the way they are
stored.
"""

import datetime as dt

from fastapi import APIRouter, Depends

from wardview.api.routes.crud import add_crud_routes
from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.records import Appointment, AppointmentDraft, AppointmentPatch, RecordModel

router = APIRouter(prefix="/appointments")


class StatusChange(RecordModel):
    status: str


@router.get("/by-patient/{patient_id}", response_model=list[Appointment])
async def appointments_for_patient(patient_id: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.appointments.get_by_patient(patient_id)


@router.get("/by-staff/{staff_id}", response_model=list[Appointment])
async def appointments_for_staff(staff_id: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.appointments.get_by_staff(staff_id)


@router.get("/range", response_model=list[Appointment])
async def appointments_in_range(
    start: dt.datetime,
    end: dt.datetime,
    registry: StoreRegistry = Depends(get_registry),
):
    return await registry.appointments.get_by_date_range(start, end)


@router.get("/status/{status_name}", response_model=list[Appointment])
async def appointments_by_status(status_name: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.appointments.get_by_status(status_name)


@router.post("/{record_id}/status", response_model=Appointment)
async def change_appointment_status(
    record_id: int,
    change: StatusChange,
    registry: StoreRegistry = Depends(get_registry),
):
    """Confirm / cancel / complete an appointment."""
    return await registry.appointments.update_status(record_id, change.status)


add_crud_routes(
    router,
    store_attr="appointments",
    record_model=Appointment,
    draft_model=AppointmentDraft,
    patch_model=AppointmentPatch,
)
