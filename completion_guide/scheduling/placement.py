"""First-fit placement shared by the greedy allocator and the re-allocator.

Working state (DaySlot) is mutable but scoped to a single pack call; it is
frozen into DayAssignment values before anything is returned.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from completion_guide.scheduling.calendar import CapacityCalendar
from completion_guide.scheduling.types import DayAssignment, WeekSchedule, WorkItem


@dataclass
class DaySlot:
    """Mutable per-day accumulator used while filling one week."""

    day: str
    capacity: float
    tasks: list[WorkItem] = field(default_factory=list)
    hours_used: float = 0.0

    def fits(self, item: WorkItem) -> bool:
        return self.hours_used + item.weight <= self.capacity

    def place(self, item: WorkItem) -> None:
        self.tasks.append(item.with_status("assigned"))
        self.hours_used += item.weight

    def freeze(self) -> DayAssignment:
        return DayAssignment(day=self.day, tasks=tuple(self.tasks), hours_used=self.hours_used)


def open_slots(
    calendar: CapacityCalendar,
    pinned: Mapping[str, Sequence[WorkItem]] | None = None,
) -> list[DaySlot]:
    """Create one slot per calendar day, seeded with that day's pinned items.

    Pinned items are kept as given (no status change) and their weight
    counts toward the day's capacity.
    """
    slots = []
    for day in calendar.days:
        seeded = list((pinned or {}).get(day, ()))
        slots.append(
            DaySlot(
                day=day,
                capacity=calendar.capacity_for(day),
                tasks=seeded,
                hours_used=sum(item.weight for item in seeded),
            )
        )
    return slots


def fill_week(slots: Sequence[DaySlot], items: Sequence[WorkItem], start: int = 0) -> int:
    """Place items from ``start`` onward with first-fit and lockout.

    Days are scanned in order. A day is locked for the rest of the week once
    it is filled exactly or once it rejects an item, and it is not revisited
    for later, lighter items. Filling stops at the first item that no
    unlocked day accepts.

    Returns:
        Index of the first item that was not placed (``len(items)`` if all were)
    """
    full: set[str] = set()
    cursor = start

    while cursor < len(items):
        item = items[cursor]
        placed = False

        for slot in slots:
            if slot.day in full:
                continue

            if slot.fits(item):
                slot.place(item)
                if slot.hours_used >= slot.capacity:
                    full.add(slot.day)
                cursor += 1
                placed = True
                break

            full.add(slot.day)

        if not placed:
            break

    return cursor


def build_week(week_number: int, calendar: CapacityCalendar, slots: Sequence[DaySlot]) -> WeekSchedule:
    return WeekSchedule(
        week_number=week_number,
        days=calendar.days,
        capacity=dict(calendar.capacity),
        day_assignments=tuple(slot.freeze() for slot in slots),
    )
