import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends

from wardview.api.routes.crud import add_crud_routes
from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.records import StaffDraft, StaffMember, StaffPatch

router = APIRouter(prefix="/staff")


@router.get("/role/{role}", response_model=list[StaffMember])
async def staff_by_role(role: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.staff.get_by_role(role)


@router.get("/department/{department}", response_model=list[StaffMember])
async def staff_by_department(department: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.staff.get_by_department(department)


@router.get("/on-duty", response_model=list[StaffMember])
async def staff_on_duty(day: Optional[dt.date] = None, registry: StoreRegistry = Depends(get_registry)):
    """Staff whose schedule says "on duty" for `day` (today when omitted)."""
    return await registry.staff.get_on_duty(day)


@router.put("/{staff_id}/patients/{patient_id}", response_model=StaffMember)
async def assign_patient(staff_id: int, patient_id: int, registry: StoreRegistry = Depends(get_registry)):
    return await registry.staff.assign_patient(staff_id, patient_id)


@router.delete("/{staff_id}/patients/{patient_id}", response_model=StaffMember)
async def unassign_patient(staff_id: int, patient_id: int, registry: StoreRegistry = Depends(get_registry)):
    return await registry.staff.unassign_patient(staff_id, patient_id)


add_crud_routes(
    router,
    store_attr="staff",
    record_model=StaffMember,
    draft_model=StaffDraft,
    patch_model=StaffPatch,
)
