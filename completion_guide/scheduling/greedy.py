"""Greedy week-by-week task allocation.

Items are taken strictly in input order and placed with first-fit (see
``placement.fill_week``). Each week is packed until an item fits nowhere,
then a new week starts. This is intentionally not optimal bin-packing.
"""

from collections.abc import Mapping, Sequence

from loguru import logger

from completion_guide.scheduling.calendar import CapacityCalendar
from completion_guide.scheduling.placement import build_week, fill_week, open_slots
from completion_guide.scheduling.types import WeekSchedule, WorkItem


def pack(
    items: Sequence[WorkItem],
    days: Sequence[str],
    capacity: Mapping[str, float],
    start_week: int = 1,
) -> list[WeekSchedule]:
    """Allocate items into consecutive weeks on a fixed calendar.

    Args:
        items: Items in scheduling order (assigned items first, then available)
        days: Day identifiers in scan order
        capacity: Capacity per day; a missing day has zero capacity
        start_week: Number given to the first produced week

    Returns:
        Weeks numbered contiguously from ``start_week``. Empty when there are
        no items or no days.
    """
    return pack_calendar(items, CapacityCalendar(days=tuple(days), capacity=capacity), start_week)


def pack_calendar(
    items: Sequence[WorkItem],
    calendar: CapacityCalendar,
    start_week: int = 1,
) -> list[WeekSchedule]:
    """Allocate items into consecutive weeks on ``calendar``.

    Every item is placed exactly once. When a week cannot take even the
    first remaining item (its weight exceeds every day's capacity), that item
    is forced onto the largest-capacity day of its own week, over capacity,
    so that packing always makes progress.
    """
    queue = list(items)
    if not queue:
        return []

    if not calendar.days:
        logger.warning("Calendar has no days; no weeks can be filled", item_count=len(queue))
        return []

    weeks: list[WeekSchedule] = []
    week_number = start_week
    cursor = 0

    while cursor < len(queue):
        slots = open_slots(calendar)
        next_cursor = fill_week(slots, queue, cursor)

        if next_cursor == cursor:
            item = queue[cursor]
            target = calendar.largest_day()
            slot = next(s for s in slots if s.day == target)
            slot.place(item)
            next_cursor += 1
            logger.debug(
                "Item exceeds every day's capacity; forced onto largest day",
                task_id=item.id,
                weight=item.weight,
                day=target,
                capacity=slot.capacity,
                week_number=week_number,
            )

        weeks.append(build_week(week_number, calendar, slots))
        week_number += 1
        cursor = next_cursor

    logger.debug(
        "Packed items into weeks",
        item_count=len(queue),
        week_count=len(weeks),
        start_week=start_week,
        days=list(calendar.days),
    )
    return weeks
