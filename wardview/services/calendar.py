"""
calendar layout engine

given an anchor date and a list of appointments, build the week grid the
appointments page renders:

- the week is Monday..Sunday and contains the anchor
- rows are 20 half-hour slots, 08:00 through 17:30
- each appointment lands in exactly one cell, matched on (local day, "HH:MM")
- several appointments with the same day + slot stack in one cell

appointments that start off the half-hour grid (09:15, 18:00, ...) are left out
of the cells. they still count toward their day's header total and their ids
are reported in `off_grid`, and we log them, so nothing disappears silently.

day headers count every appointment on that day, independent of the grid.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from wardview.core.logging_config import get_logger
from wardview.schemas.records import Appointment

logger = get_logger(__name__)

A = TypeVar("A", bound=Appointment)

DAY_START = dt.time(8, 0)
SLOT_MINUTES = 30
SLOT_COUNT = 20
DAYS_IN_WEEK = 7


def _build_slots() -> list[str]:
    start = dt.datetime.combine(dt.date.min, DAY_START)
    return [
        (start + dt.timedelta(minutes=SLOT_MINUTES * i)).strftime("%H:%M")
        for i in range(SLOT_COUNT)
    ]


# "08:00", "08:30", ... "17:30"
TIME_SLOTS: list[str] = _build_slots()


@dataclass
class DayColumn(Generic[A]):
    date: dt.date
    is_today: bool
    appointments: list[A] = field(default_factory=list)

    @property
    def weekday(self) -> str:
        return self.date.strftime("%a")

    @property
    def appointment_count(self) -> int:
        return len(self.appointments)


@dataclass
class WeekLayout(Generic[A]):
    week_start: dt.date
    days: list[DayColumn[A]]
    # cells[day_index][slot_index]
    cells: list[list[list[A]]]
    off_grid: list[A] = field(default_factory=list)
    slots: Sequence[str] = field(default_factory=lambda: list(TIME_SLOTS))

    @property
    def week_end(self) -> dt.date:
        return self.week_start + dt.timedelta(days=DAYS_IN_WEEK - 1)

    def cell(self, day: dt.date, slot: str) -> list[A]:
        return self.cells[(day - self.week_start).days][self.slots.index(slot)]


def week_start(anchor: dt.date) -> dt.date:
    """Monday of the week containing `anchor`."""
    return anchor - dt.timedelta(days=anchor.weekday())


def shift_week(anchor: dt.date, weeks: int) -> dt.date:
    return anchor + dt.timedelta(days=DAYS_IN_WEEK * weeks)


def local_time(moment: dt.datetime) -> dt.datetime:
    # naive datetimes are already local, aware ones are converted
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def slot_label(moment: dt.datetime) -> Optional[str]:
    """The "HH:MM" slot an instant starts in, or None when it is off the grid."""
    label = local_time(moment).strftime("%H:%M")
    return label if label in TIME_SLOTS else None


def layout_week(
    appointments: Iterable[A],
    anchor: dt.date,
    today: Optional[dt.date] = None,
) -> WeekLayout[A]:
    today = today or dt.date.today()
    start = week_start(anchor)
    dates = [start + dt.timedelta(days=i) for i in range(DAYS_IN_WEEK)]
    day_index = {d: i for i, d in enumerate(dates)}

    days: list[DayColumn[A]] = [DayColumn(date=d, is_today=(d == today)) for d in dates]
    cells: list[list[list[A]]] = [[[] for _ in TIME_SLOTS] for _ in dates]
    off_grid: list[A] = []

    # sorted once, so every day column and every cell comes out in time order
    ordered = sorted(appointments, key=lambda a: local_time(a.date_time))

    for appointment in ordered:
        moment = local_time(appointment.date_time)
        i = day_index.get(moment.date())
        if i is None:
            continue

        days[i].appointments.append(appointment)

        label = slot_label(moment)
        if label is None:
            off_grid.append(appointment)
            logger.warning(
                "appointment_off_grid",
                appointment_id=appointment.id,
                date_time=moment.isoformat(),
            )
            continue

        cells[i][TIME_SLOTS.index(label)].append(appointment)

    return WeekLayout(week_start=start, days=days, cells=cells, off_grid=off_grid)
