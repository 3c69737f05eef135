from fastapi import APIRouter, Depends
from pydantic import Field

from wardview.api.routes.crud import add_crud_routes
from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.records import Department, DepartmentDraft, DepartmentPatch, RecordModel
from wardview.schemas.views import OccupancyStats

router = APIRouter(prefix="/departments")


class BedCount(RecordModel):
    total_beds: int = Field(ge=0)
    occupied_beds: int = Field(ge=0)


class EquipmentItem(RecordModel):
    item: str = Field(min_length=1)


@router.get("/occupancy", response_model=OccupancyStats)
async def occupancy(registry: StoreRegistry = Depends(get_registry)):
    return await registry.departments.occupancy_stats()


@router.get("/over-threshold", response_model=list[Department])
async def over_threshold(threshold: float = 80, registry: StoreRegistry = Depends(get_registry)):
    """Departments at or above `threshold` percent occupancy."""
    return await registry.departments.get_by_occupancy_threshold(threshold)


@router.put("/{record_id}/beds", response_model=Department)
async def update_beds(record_id: int, beds: BedCount, registry: StoreRegistry = Depends(get_registry)):
    return await registry.departments.update_bed_count(record_id, beds.total_beds, beds.occupied_beds)


@router.post("/{record_id}/equipment", response_model=Department)
async def add_equipment(record_id: int, equipment: EquipmentItem, registry: StoreRegistry = Depends(get_registry)):
    return await registry.departments.add_equipment(record_id, equipment.item)


add_crud_routes(
    router,
    store_attr="departments",
    record_model=Department,
    draft_model=DepartmentDraft,
    patch_model=DepartmentPatch,
)
