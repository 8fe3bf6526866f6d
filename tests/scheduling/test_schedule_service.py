"""Tests for schedule generation and week overrides.

Tests verify that:
- Selections are normalized (weekday order, default minutes)
- Missing inputs raise ScheduleInputError
- Warnings reflect allocation count and the completion date
- Overrides pin checked items, cascade leftovers and never duplicate items
"""

from datetime import date, timedelta

import pytest
from schedule_helpers import day_ids, schedule_ids

from completion_guide.core.errors import ScheduleInputError, WeekNotFoundError
from completion_guide.scheduling.advisories import compute_warnings, weeks_until
from completion_guide.scheduling.greedy import pack
from completion_guide.scheduling.service import (
    build_calendar,
    day_progress,
    final_day,
    find_task,
    generate_schedule,
    override_week,
)
from completion_guide.tasks.pool import TaskPool, initialize_task_pool

TODAY = date(2026, 1, 5)


@pytest.fixture
def six_items_two_weeks(make_items):
    """Six 30-minute items on M/T at 60 minutes: week 1 M[1,2] T[3,4], week 2 M[5,6]."""
    return pack(make_items([30] * 6), ["M", "T"], {"M": 60, "T": 60})


def test_build_calendar_orders_days_and_fills_defaults():
    calendar = build_calendar(["F", "M", "W"], {"F": 90, "W": 0}, default_minutes=60)

    assert calendar.days == ("M", "W", "F")
    assert dict(calendar.capacity) == {"M": 60, "W": 60, "F": 90}


def test_generate_schedule_requires_completion_date(make_items):
    pool = initialize_task_pool(make_items([30]))

    with pytest.raises(ScheduleInputError, match="completion date"):
        generate_schedule(pool, ["M"], {"M": 60}, None)


def test_generate_schedule_requires_days(make_items):
    pool = initialize_task_pool(make_items([30]))

    with pytest.raises(ScheduleInputError, match="at least one weekday"):
        generate_schedule(pool, [], {}, TODAY)


def test_generate_schedule_packs_pool_from_week_one(make_items):
    pool = initialize_task_pool(make_items([30, 30, 30]))

    result = generate_schedule(pool, ["M"], {}, TODAY + timedelta(days=14), today=TODAY, default_minutes=60)

    assert [w.week_number for w in result.weeks] == [1, 2]
    assert day_ids(result.weeks[0], "M") == [1, 2]
    assert result.selected_days == ["M"]
    assert result.minutes_per_day == {"M": 60}
    assert not result.warnings.any


def test_generate_schedule_puts_assigned_before_available(make_items):
    assigned, available = make_items([30], start_id=9), make_items([30, 30])
    pool = TaskPool(available=tuple(available), assigned=tuple(assigned))

    result = generate_schedule(pool, ["M"], {"M": 90}, TODAY + timedelta(days=30), today=TODAY)

    assert schedule_ids(result.weeks) == [9, 1, 2]


def test_exceeded_date_warning(make_items):
    pool = initialize_task_pool(make_items([30, 30, 30]))

    result = generate_schedule(pool, ["M"], {"M": 60}, TODAY + timedelta(days=7), today=TODAY)

    assert weeks_until(TODAY + timedelta(days=7), TODAY) == 1
    assert result.warnings.exceeded_date
    assert not result.warnings.unallocated_tasks


def test_unallocated_warning_when_catalog_size_differs(make_items):
    pool = initialize_task_pool(make_items([30, 30]))

    result = generate_schedule(pool, ["M"], {"M": 60}, TODAY + timedelta(days=60), catalog_size=3, today=TODAY)

    assert result.warnings.unallocated_tasks


def test_weeks_until_rounds_up():
    assert weeks_until(TODAY + timedelta(days=8), TODAY) == 2
    assert weeks_until(TODAY, TODAY) == 0
    assert weeks_until(TODAY - timedelta(days=3), TODAY) == 0
    assert weeks_until(TODAY - timedelta(days=10), TODAY) == 0


def test_past_completion_date_counts_as_exceeded(make_items):
    weeks = pack(make_items([30]), ["M"], {"M": 60})

    warnings = compute_warnings(weeks, 1, TODAY - timedelta(days=30), TODAY)

    assert warnings.exceeded_date
    assert not warnings.unallocated_tasks


def test_override_pins_checked_and_cascades_leftover(six_items_two_weeks):
    """Test a reduced week: checked item stays, leftover moves to rebuilt later weeks."""
    weeks = override_week(six_items_two_weeks, 1, ["M"], {"M": 60}, checked_ids={1})

    assert [w.week_number for w in weeks] == [1, 2]
    assert weeks[0].days == ("M",)
    assert day_ids(weeks[0], "M") == [1, 2]
    assert day_ids(weeks[1], "M") == [3, 4]
    assert day_ids(weeks[1], "T") == [5, 6]
    assert weeks[1].capacity == {"M": 60, "T": 60}
    assert sorted(schedule_ids(weeks)) == [1, 2, 3, 4, 5, 6]


def test_override_with_more_time_removes_emptied_weeks(six_items_two_weeks):
    """Test that pulling later items forward drops later weeks instead of duplicating them."""
    weeks = override_week(six_items_two_weeks, 1, ["M", "T"], {"M": 120, "T": 60})

    assert len(weeks) == 1
    assert day_ids(weeks[0], "M") == [1, 2, 3, 4]
    assert day_ids(weeks[0], "T") == [5, 6]


def test_override_keeps_checked_items_of_later_weeks(six_items_two_weeks):
    """Test that completed items in later weeks are re-flowed, not lost."""
    weeks = override_week(six_items_two_weeks, 1, ["M"], {"M": 60}, checked_ids={5})

    assert day_ids(weeks[0], "M") == [1, 2]
    assert day_ids(weeks[1], "M") == [3, 4]
    assert day_ids(weeks[1], "T") == [5, 6]
    assert sorted(schedule_ids(weeks)) == [1, 2, 3, 4, 5, 6]


def test_override_of_last_week_uses_new_calendar(make_items):
    weeks = pack(make_items([30, 30, 30]), ["M"], {"M": 90})

    updated = override_week(weeks, 1, ["M"], {"M": 60})

    assert [w.week_number for w in updated] == [1, 2]
    assert day_ids(updated[1], "M") == [3]
    assert updated[1].capacity == {"M": 60}


def test_override_of_middle_week_keeps_earlier_weeks(make_items):
    weeks = pack(make_items([60] * 4), ["M"], {"M": 60})

    updated = override_week(weeks, 2, ["M", "W"], {"M": 60, "W": 60}, checked_ids={1})

    assert updated[0] == weeks[0]
    assert day_ids(updated[1], "M") == [2]
    assert day_ids(updated[1], "W") == [3]
    assert day_ids(updated[2], "M") == [4]
    assert [w.week_number for w in updated] == [1, 2, 3]


def test_override_without_days_raises_and_keeps_items(make_items):
    """Test that emptying the last week is rejected instead of dropping its items."""
    weeks = pack(make_items([30, 30, 30]), ["M"], {"M": 90})

    with pytest.raises(ScheduleInputError, match="at least one weekday"):
        override_week(weeks, 1, [], {}, checked_ids={1})

    assert schedule_ids(weeks) == [1, 2, 3]


def test_override_unknown_week_raises(six_items_two_weeks):
    with pytest.raises(WeekNotFoundError, match="Week 9"):
        override_week(six_items_two_weeks, 9, ["M"], {"M": 60})


def test_final_day_and_progress(six_items_two_weeks):
    assert final_day(six_items_two_weeks) == (2, "M")
    assert final_day([]) is None

    progress = day_progress(six_items_two_weeks[0], {1, 2, 3})

    assert [(p.day, p.completed, p.remaining) for p in progress] == [("M", 2, 0), ("T", 1, 1)]
    assert progress[0].is_complete
    assert not progress[1].is_complete


def test_find_task(six_items_two_weeks):
    week, day, task = find_task(six_items_two_weeks, 5)

    assert (week.week_number, day, task.id) == (2, "M", 5)
    assert find_task(six_items_two_weeks, 99) is None
