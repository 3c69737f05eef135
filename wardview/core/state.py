"""
in-memory store registry

holds the four record stores for the life of the process:
- patients
- staff
- appointments
- departments

every store is seeded from the bundled fixtures the first time someone asks
for the registry. mutations only live in memory, a restart brings the fixture
data back.

routes never build stores themselves, they go through get_registry(). tests
call reset_registry(latency_scale=0) to get a fresh, instant copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wardview.core.config import settings
from wardview.core.logging_config import get_logger
from wardview.services.fixtures import load_fixture
from wardview.services.store import AppointmentStore, DepartmentStore, PatientStore, StaffStore

logger = get_logger(__name__)


@dataclass
class StoreRegistry:
    patients: PatientStore
    staff: StaffStore
    appointments: AppointmentStore
    departments: DepartmentStore

    @classmethod
    def from_fixtures(cls, fixtures_dir: Path, latency_scale: float = 0.0) -> "StoreRegistry":
        registry = cls(
            patients=PatientStore(load_fixture("patients", fixtures_dir), latency_scale),
            staff=StaffStore(load_fixture("staff", fixtures_dir), latency_scale),
            appointments=AppointmentStore(load_fixture("appointments", fixtures_dir), latency_scale),
            departments=DepartmentStore(load_fixture("departments", fixtures_dir), latency_scale),
        )
        logger.info("stores_seeded", **registry.record_counts())
        return registry

    def record_counts(self) -> dict[str, int]:
        return {
            "patients": len(self.patients),
            "staff": len(self.staff),
            "appointments": len(self.appointments),
            "departments": len(self.departments),
        }


_REGISTRY: Optional[StoreRegistry] = None


def get_registry() -> StoreRegistry:
    """
    Returns the process-wide registry, seeding it on first use.

    Also works as a FastAPI dependency.
    """
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = StoreRegistry.from_fixtures(settings.fixtures_dir, settings.latency_scale)
    return _REGISTRY


def reset_registry(latency_scale: Optional[float] = None) -> StoreRegistry:
    """
    Throws away every in-memory mutation and reseeds from the fixtures.
    """
    global _REGISTRY
    scale = settings.latency_scale if latency_scale is None else latency_scale
    _REGISTRY = StoreRegistry.from_fixtures(settings.fixtures_dir, scale)
    return _REGISTRY
