"""
fixture loading

the stores are seeded from json arrays bundled under wardview/data/.
each file is a list of camelCase objects matching schemas/records.py.

the data is trusted: we validate shapes (pydantic does that when the store is
built) but we do not check cross-entity references.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from wardview.core.logging_config import get_logger

logger = get_logger(__name__)

FIXTURE_FILES: dict[str, str] = {
    "patients": "patients.json",
    "staff": "staff.json",
    "appointments": "appointments.json",
    "departments": "departments.json",
}


def load_fixture(name: str, fixtures_dir: Path) -> list[dict[str, Any]]:
    path = Path(fixtures_dir) / FIXTURE_FILES[name]
    with path.open(encoding="utf-8") as fh:
        records = json.load(fh)

    if not isinstance(records, list):
        raise ValueError(f"Fixture {path} must contain a JSON array")

    logger.debug("fixture_loaded", fixture=name, path=str(path), count=len(records))
    return records
