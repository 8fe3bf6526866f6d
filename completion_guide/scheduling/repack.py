"""Single-week re-allocation after a calendar edit.

Completed (pinned) items stay on their day; the movable pool is re-packed
into the week with the same first-fit rule the greedy allocator uses. The
week never grows: whatever does not fit comes back as leftover for the
caller to pack into the following weeks.
"""

from collections.abc import Mapping, Sequence

from loguru import logger

from completion_guide.scheduling.calendar import CapacityCalendar
from completion_guide.scheduling.placement import DaySlot, fill_week, open_slots
from completion_guide.scheduling.types import RepackResult, WeekSchedule, WorkItem


def repack(
    week: WeekSchedule,
    new_days: Sequence[str],
    new_capacity: Mapping[str, float],
    movable: Sequence[WorkItem],
    pinned: Mapping[str, Sequence[WorkItem]] | None = None,
) -> RepackResult:
    """Rebuild one week on a new calendar.

    Args:
        week: The week being edited (its number is kept)
        new_days: New day identifiers for the week, in scan order
        new_capacity: New capacity per day
        movable: Items free to be placed, in priority order
        pinned: Completed items per day that must stay where they are

    Returns:
        RepackResult with the rebuilt week and the unplaced movable items

    Pinned items whose day is no longer in ``new_days`` are kept on that day
    (with zero capacity, after the new days) so they never leave the week.
    """
    pinned = pinned or {}
    calendar = CapacityCalendar(days=tuple(new_days), capacity=new_capacity)

    pinned_ids = {item.id for items in pinned.values() for item in items}
    queue = [item for item in movable if item.id not in pinned_ids]
    if len(queue) != len(movable):
        logger.warning(
            "Dropped pinned items from movable pool",
            week_number=week.week_number,
            dropped=len(movable) - len(queue),
        )

    slots = open_slots(calendar, pinned)
    placed_count = fill_week(slots, queue)

    orphaned = [day for day in week.days if day not in calendar.days and pinned.get(day)]
    orphaned += [day for day in pinned if day not in calendar.days and day not in orphaned and pinned[day]]
    extra_slots = [
        DaySlot(
            day=day,
            capacity=0.0,
            tasks=list(pinned[day]),
            hours_used=sum(item.weight for item in pinned[day]),
        )
        for day in orphaned
    ]
    if extra_slots:
        logger.info(
            "Keeping completed items on days removed from the week",
            week_number=week.week_number,
            days=orphaned,
        )

    updated_week = WeekSchedule(
        week_number=week.week_number,
        days=calendar.days,
        capacity=dict(calendar.capacity),
        day_assignments=tuple(slot.freeze() for slot in [*slots, *extra_slots]),
    )
    leftover = tuple(queue[placed_count:])

    logger.debug(
        "Re-packed week",
        week_number=week.week_number,
        placed=placed_count,
        leftover=len(leftover),
        pinned=len(pinned_ids),
    )
    return RepackResult(updated_week=updated_week, leftover=leftover)
