"""Tests for the calendar layout engine."""
import datetime as dt

from wardview.services.calendar import TIME_SLOTS, layout_week, shift_week, slot_label, week_start

from conftest import FIXTURE_MONDAY

WEDNESDAY = dt.date(2024, 3, 6)


def test_time_slots_cover_the_working_day():
    assert len(TIME_SLOTS) == 20
    assert TIME_SLOTS[0] == "08:00"
    assert TIME_SLOTS[-1] == "17:30"
    assert "12:30" in TIME_SLOTS


def test_week_starts_on_monday():
    assert week_start(dt.date(2024, 3, 4)) == FIXTURE_MONDAY
    assert week_start(dt.date(2024, 3, 7)) == FIXTURE_MONDAY
    # sunday still belongs to the week that started the monday before
    assert week_start(dt.date(2024, 3, 10)) == FIXTURE_MONDAY


def test_shift_week():
    assert shift_week(WEDNESDAY, 1) == dt.date(2024, 3, 13)
    assert shift_week(WEDNESDAY, -1) == dt.date(2024, 2, 28)
    assert shift_week(WEDNESDAY, 0) == WEDNESDAY


def test_appointments_land_in_their_cells(make_appointment):
    monday_nine = make_appointment(1, dt.datetime(2024, 3, 4, 9, 0))
    wednesday_half_past = make_appointment(2, dt.datetime(2024, 3, 6, 9, 30))
    off_grid = make_appointment(3, dt.datetime(2024, 3, 4, 9, 15))

    week = layout_week([monday_nine, wednesday_half_past, off_grid], anchor=WEDNESDAY, today=WEDNESDAY)

    assert week.week_start == FIXTURE_MONDAY
    assert week.week_end == dt.date(2024, 3, 10)
    assert [a.id for a in week.cell(FIXTURE_MONDAY, "09:00")] == [1]
    assert [a.id for a in week.cell(WEDNESDAY, "09:30")] == [2]

    placed = [a.id for day in week.cells for cell in day for a in cell]
    assert 3 not in placed
    assert [a.id for a in week.off_grid] == [3]


def test_grid_shape(make_appointment):
    week = layout_week([], anchor=FIXTURE_MONDAY, today=FIXTURE_MONDAY)
    assert len(week.cells) == 7
    assert all(len(day) == 20 for day in week.cells)
    assert [d.weekday for d in week.days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def test_same_slot_stacks(make_appointment):
    first = make_appointment(1, dt.datetime(2024, 3, 5, 14, 0))
    second = make_appointment(2, dt.datetime(2024, 3, 5, 14, 0), patient_id="2")

    week = layout_week([second, first], anchor=FIXTURE_MONDAY, today=FIXTURE_MONDAY)
    assert sorted(a.id for a in week.cell(dt.date(2024, 3, 5), "14:00")) == [1, 2]


def test_day_counts_include_off_grid_and_are_time_sorted(make_appointment):
    late = make_appointment(1, dt.datetime(2024, 3, 4, 16, 0))
    early = make_appointment(2, dt.datetime(2024, 3, 4, 8, 30))
    evening = make_appointment(3, dt.datetime(2024, 3, 4, 19, 0))

    week = layout_week([late, early, evening], anchor=FIXTURE_MONDAY, today=FIXTURE_MONDAY)
    monday = week.days[0]

    assert monday.appointment_count == 3
    assert [a.id for a in monday.appointments] == [2, 1, 3]
    assert [a.id for a in week.off_grid] == [3]


def test_other_weeks_are_ignored(make_appointment):
    next_week = make_appointment(1, dt.datetime(2024, 3, 11, 9, 0))
    week = layout_week([next_week], anchor=FIXTURE_MONDAY, today=FIXTURE_MONDAY)

    assert all(d.appointment_count == 0 for d in week.days)
    assert week.off_grid == []

    moved = layout_week([next_week], anchor=shift_week(FIXTURE_MONDAY, 1), today=FIXTURE_MONDAY)
    assert [a.id for a in moved.cell(dt.date(2024, 3, 11), "09:00")] == [1]


def test_today_highlight():
    week = layout_week([], anchor=FIXTURE_MONDAY, today=WEDNESDAY)
    assert [d.is_today for d in week.days] == [False, False, True, False, False, False, False]


def test_slot_label():
    assert slot_label(dt.datetime(2024, 3, 4, 17, 30)) == "17:30"
    assert slot_label(dt.datetime(2024, 3, 4, 7, 30)) is None
    assert slot_label(dt.datetime(2024, 3, 4, 18, 0)) is None
