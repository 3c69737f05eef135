from fastapi import APIRouter, Depends

from wardview.api.routes.crud import add_crud_routes
from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.records import Patient, PatientDraft, PatientPatch

router = APIRouter(prefix="/patients")


@router.get("/status/{status_name}", response_model=list[Patient])
async def patients_by_status(status_name: str, registry: StoreRegistry = Depends(get_registry)):
    return await registry.patients.get_by_status(status_name)


add_crud_routes(
    router,
    store_attr="patients",
    record_model=Patient,
    draft_model=PatientDraft,
    patch_model=PatientPatch,
)
