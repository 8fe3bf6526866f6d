"""Service layer for schedule generation and week overrides.

This is the public entry point used by the CLI. It binds the weekday
vocabulary and defaults to the generic allocator, and implements the
cascade that follows a single-week re-pack.

Flow for an override of week k:
1. Split week k into checked (pinned per day) and unchecked items
2. Movable = unchecked items of week k, then unchecked items of later weeks
3. Re-pack week k on its new calendar
4. Rebuild every later week from the leftover, starting at k + 1
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from loguru import logger
from pydantic import BaseModel

from completion_guide.config.settings import settings
from completion_guide.core.errors import ScheduleInputError, WeekNotFoundError
from completion_guide.scheduling.advisories import ScheduleWarnings, compute_warnings
from completion_guide.scheduling.calendar import CapacityCalendar
from completion_guide.scheduling.greedy import pack_calendar
from completion_guide.scheduling.repack import repack
from completion_guide.scheduling.types import WeekSchedule, WorkItem
from completion_guide.scheduling.weekdays import order_days
from completion_guide.tasks.pool import TaskPool


class ScheduleResult(BaseModel):
    """Output of an initial schedule generation.

    Attributes:
        weeks: Generated weeks, numbered from 1
        selected_days: Selected days in weekday order
        minutes_per_day: Minutes per selected day after defaults were applied
        warnings: Advisory flags for the generated schedule
    """

    weeks: list[WeekSchedule]
    selected_days: list[str]
    minutes_per_day: dict[str, float]
    warnings: ScheduleWarnings


class DayProgress(BaseModel):
    day: str
    completed: int
    remaining: int

    @property
    def is_complete(self) -> bool:
        return self.remaining == 0 and self.completed > 0


def build_calendar(
    selected_days: Iterable[str],
    minutes_per_day: Mapping[str, float],
    default_minutes: float | None = None,
) -> CapacityCalendar:
    """Build the weekly calendar from user selections.

    Days are put in weekday order. A selected day with no minutes (or zero)
    gets ``default_minutes`` (from settings when not given).
    """
    fallback = default_minutes if default_minutes is not None else settings.default_minutes_per_day
    days = order_days(selected_days)
    capacity = {day: minutes_per_day.get(day) or fallback for day in days}
    return CapacityCalendar(days=tuple(days), capacity=capacity)


def generate_schedule(
    pool: TaskPool,
    selected_days: Sequence[str],
    minutes_per_day: Mapping[str, float],
    completion_date: date | None,
    catalog_size: int | None = None,
    today: date | None = None,
    default_minutes: float | None = None,
) -> ScheduleResult:
    """Generate the full schedule from week 1.

    Args:
        pool: Task pool; assigned items are scheduled before available ones
        selected_days: Days the user can work
        minutes_per_day: Minutes per day (missing or zero -> default)
        completion_date: Target completion date
        catalog_size: Expected number of items (defaults to the pool size)
        today: Reference date for the completion-date check
        default_minutes: Override for the default minutes per day

    Returns:
        ScheduleResult with weeks and warnings

    Raises:
        ScheduleInputError: If no completion date or no day was given
    """
    if completion_date is None:
        logger.warning("Schedule requested without a completion date")
        raise ScheduleInputError("Please pick a completion date.")
    if not selected_days:
        logger.warning("Schedule requested without any selected day")
        raise ScheduleInputError("Please select at least one weekday.")

    calendar = build_calendar(selected_days, minutes_per_day, default_minutes)
    weeks = pack_calendar(pool.ordered_items(), calendar, start_week=1)

    expected = catalog_size if catalog_size is not None else pool.total()
    warnings = compute_warnings(weeks, expected, completion_date, today or date.today())

    logger.info(
        "Generated schedule",
        weeks=len(weeks),
        days=list(calendar.days),
        weekly_capacity=calendar.total_capacity(),
        task_count=expected,
    )
    return ScheduleResult(
        weeks=weeks,
        selected_days=list(calendar.days),
        minutes_per_day=dict(calendar.capacity),
        warnings=warnings,
    )


def find_week_index(weeks: Sequence[WeekSchedule], week_number: int) -> int:
    for index, week in enumerate(weeks):
        if week.week_number == week_number:
            return index
    raise WeekNotFoundError(f"Week {week_number} is not in the schedule")


def override_week(
    weeks: Sequence[WeekSchedule],
    week_number: int,
    new_days: Sequence[str],
    new_capacity: Mapping[str, float],
    checked_ids: Iterable[int] = (),
) -> list[WeekSchedule]:
    """Apply a new calendar to one week and cascade into the following weeks.

    Checked items of the edited week stay on their day. Checked items of
    later weeks are re-flowed together with the leftover, in their previous
    schedule order, so the rebuilt schedule still holds every item once.

    The later weeks are packed on the calendar of the week that followed the
    edited one, or on the new calendar when the edited week was the last.

    Raises:
        WeekNotFoundError: If ``week_number`` is not in ``weeks``
        ScheduleInputError: If ``new_days`` is empty
    """
    try:
        index = find_week_index(weeks, week_number)
    except WeekNotFoundError:
        logger.error("Override requested for unknown week", week_number=week_number, week_count=len(weeks))
        raise
    if not new_days:
        logger.warning("Override requested without any selected day", week_number=week_number)
        raise ScheduleInputError("Please select at least one weekday.")

    current = weeks[index]
    later = weeks[index + 1 :]
    checked = set(checked_ids)

    pinned: dict[str, list[WorkItem]] = {}
    movable: list[WorkItem] = []
    for assignment in current.day_assignments:
        done = [task for task in assignment.tasks if task.id in checked]
        if done:
            pinned[assignment.day] = done
        movable.extend(task for task in assignment.tasks if task.id not in checked)

    later_tasks = [task for week in later for task in week.tasks]
    movable.extend(task for task in later_tasks if task.id not in checked)
    completed_later = [task for task in later_tasks if task.id in checked]

    result = repack(current, new_days, new_capacity, movable, pinned)

    if later:
        template = CapacityCalendar.from_week(later[0])
    else:
        template = CapacityCalendar(days=tuple(new_days), capacity=new_capacity)

    position = {task.id: i for i, task in enumerate([*current.tasks, *later_tasks])}
    cascade = sorted([*result.leftover, *completed_later], key=lambda task: position.get(task.id, len(position)))
    rebuilt = pack_calendar(cascade, template, start_week=current.week_number + 1)

    logger.info(
        "Applied week override",
        week_number=week_number,
        pinned=sum(len(items) for items in pinned.values()),
        leftover=len(result.leftover),
        weeks_before=len(weeks),
        weeks_after=index + 1 + len(rebuilt),
    )
    return [*weeks[:index], result.updated_week, *rebuilt]


def find_task(weeks: Sequence[WeekSchedule], task_id: int) -> tuple[WeekSchedule, str, WorkItem] | None:
    """Locate a task in the schedule as (week, day, item)."""
    for week in weeks:
        for assignment in week.day_assignments:
            for task in assignment.tasks:
                if task.id == task_id:
                    return week, assignment.day, task
    return None


def final_day(weeks: Sequence[WeekSchedule]) -> tuple[int, str] | None:
    """Week number and day of the last day that has any task."""
    for week in reversed(weeks):
        for assignment in reversed(week.day_assignments):
            if assignment.tasks:
                return week.week_number, assignment.day
    return None


def day_progress(week: WeekSchedule, checked_ids: Iterable[int]) -> list[DayProgress]:
    checked = set(checked_ids)
    progress = []
    for assignment in week.day_assignments:
        completed = sum(1 for task in assignment.tasks if task.id in checked)
        progress.append(
            DayProgress(
                day=assignment.day,
                completed=completed,
                remaining=len(assignment.tasks) - completed,
            )
        )
    return progress
