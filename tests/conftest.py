"""Shared test fixtures."""
import datetime as dt

import pytest

from wardview.core.state import reset_registry
from wardview.schemas.records import Appointment

# Monday of the week the bundled fixtures are built around
FIXTURE_MONDAY = dt.date(2024, 3, 4)


@pytest.fixture(autouse=True)
def registry():
    """Fresh stores from the fixtures, no simulated latency."""
    return reset_registry(latency_scale=0)


@pytest.fixture
def make_appointment():
    """Create a bare appointment at a given time."""
    def _create(record_id: int, when: dt.datetime, **overrides) -> Appointment:
        data = {
            "id": record_id,
            "patient_id": "1",
            "staff_id": "1",
            "date_time": when,
            "duration": 30,
            "type": "Checkup",
            "department": "Cardiology",
            "status": "confirmed",
        }
        data.update(overrides)
        return Appointment.model_validate(data)
    return _create
