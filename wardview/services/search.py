"""
filter / search evaluator

filter_records(records, kind, search_term, status_or_role) is the one
function behind every list page:

- search_term: case-insensitive substring match against a fixed set of fields
  per record kind. empty or None matches everything.
- status_or_role: equality against the kind's status field, compared through
  the status parse functions. "all" (or empty) matches everything.

the two predicates are ANDed and the input order is kept.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, Optional, TypeVar

from wardview.schemas.status import (
    AppointmentStatus,
    DutyStatus,
    PatientStatus,
    StaffRole,
    normalize,
    parse_appointment_status,
    parse_duty_status,
    parse_patient_status,
    parse_staff_role,
)

T = TypeVar("T")

MATCH_ALL = "all"


def _patient_fields(p: Any) -> list[str]:
    return [f"{p.first_name} {p.last_name}", p.assigned_room, p.primary_physician]


def _staff_fields(s: Any) -> list[str]:
    return [s.name, s.role, s.department]


def _appointment_fields(a: Any) -> list[str]:
    return [a.patient_name, a.staff_name, a.type, a.department]


def _department_fields(d: Any) -> list[str]:
    return [d.name]


SEARCH_FIELDS: dict[str, Callable[[Any], list[str]]] = {
    "patient": _patient_fields,
    "staff": _staff_fields,
    "appointment": _appointment_fields,
    "department": _department_fields,
}

# (field getter, parser) per status domain
STATUS_FIELDS: dict[str, tuple[Callable[[Any], Optional[str]], Callable[[Optional[str]], Enum]]] = {
    "patient": (lambda p: p.current_status, parse_patient_status),
    "appointment": (lambda a: a.status, parse_appointment_status),
    "staff_role": (lambda s: s.role, parse_staff_role),
    "staff_duty": (lambda s: s.current_status, parse_duty_status),
}

# the tabs each list page shows, in display order
STATUS_TABS: dict[str, Sequence[Enum]] = {
    "patient": [s for s in PatientStatus if s is not PatientStatus.unknown],
    "appointment": [s for s in AppointmentStatus if s is not AppointmentStatus.unknown],
    "staff_role": [r for r in StaffRole if r is not StaffRole.unknown],
    "staff_duty": [d for d in DutyStatus if d is not DutyStatus.unknown],
}


def matches_search(record: Any, kind: str, search_term: Optional[str]) -> bool:
    if not search_term:
        return True
    needle = search_term.casefold()
    return any(needle in (value or "").casefold() for value in SEARCH_FIELDS[kind](record))


def matches_status(record: Any, domain: str, wanted: Optional[str]) -> bool:
    if not wanted or wanted.strip().casefold() == MATCH_ALL:
        return True
    getter, parse = STATUS_FIELDS[domain]
    target = parse(wanted)
    if target.value == "unknown":
        # an unrecognised filter value still matches records carrying the same raw string
        return normalize(getter(record)) == normalize(wanted)
    return parse(getter(record)) == target


def filter_records(
    records: Iterable[T],
    kind: str,
    search_term: Optional[str] = None,
    status_or_role: Optional[str] = None,
    status_domain: Optional[str] = None,
) -> list[T]:
    """
    kind picks the search fields ("patient", "staff", "appointment",
    "department"). status_domain picks the status field and defaults to kind;
    the staff page passes "staff_role" or "staff_duty".
    """
    domain = status_domain or kind
    if status_or_role and domain not in STATUS_FIELDS:
        raise ValueError(f"No status field for {domain!r}")

    return [
        r
        for r in records
        if matches_search(r, kind, search_term) and matches_status(r, domain, status_or_role)
    ]


def filter_staff(
    staff: Iterable[T],
    search_term: Optional[str] = None,
    role: Optional[str] = None,
    duty_status: Optional[str] = None,
) -> list[T]:
    """The staff page filters on role and today's duty status at the same time."""
    return [
        s
        for s in staff
        if matches_search(s, "staff", search_term)
        and matches_status(s, "staff_role", role)
        and matches_status(s, "staff_duty", duty_status)
    ]


def status_counts(records: Sequence[Any], domain: str) -> dict[str, int]:
    """Tab counts: "all" plus one entry per known status, zeros included."""
    getter, parse = STATUS_FIELDS[domain]
    counts = {MATCH_ALL: len(records)}
    for member in STATUS_TABS[domain]:
        counts[member.value] = 0
    for record in records:
        value = parse(getter(record)).value
        if value in counts:
            counts[value] += 1
    return counts
