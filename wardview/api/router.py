"""
api router

the table of contents for every endpoint. main.py only creates the app and
includes this router.
"""

from fastapi import APIRouter

from wardview.api.routes.appointments import router as appointments_router
from wardview.api.routes.departments import router as departments_router
from wardview.api.routes.health import router as health_router
from wardview.api.routes.patients import router as patients_router
from wardview.api.routes.staff import router as staff_router
from wardview.api.routes.views import router as views_router

api_router = APIRouter()

# health checks and sanity endpoints
api_router.include_router(health_router, tags=["health"])

# one endpoint per dashboard page (dashboard, patients, appointments, staff, departments, reports)
api_router.include_router(views_router, tags=["views"])

# record crud + entity specific actions
api_router.include_router(patients_router, tags=["patients"])
api_router.include_router(appointments_router, tags=["appointments"])
api_router.include_router(staff_router, tags=["staff"])
api_router.include_router(departments_router, tags=["departments"])
