from fastapi import APIRouter, Depends

from wardview.core.config import settings
from wardview.core.state import StoreRegistry, get_registry
from wardview.schemas.views import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(registry: StoreRegistry = Depends(get_registry)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        app=settings.app_name,
        environment=settings.environment,
        record_counts=registry.record_counts(),
    )
