"""Capacity calendar: ordered day identifiers plus per-day capacity."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from completion_guide.scheduling.types import WeekSchedule


def total_weekly_capacity(days: Iterable[str], capacity: Mapping[str, float]) -> float:
    """Sum the capacity of the given days. A day missing from the map counts as zero."""
    return sum(capacity.get(day, 0) or 0 for day in days)


def distinct_days(days: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated day identifiers, keeping first occurrences in order."""
    return tuple(dict.fromkeys(days))


@dataclass(frozen=True)
class CapacityCalendar:
    """Immutable weekly calendar.

    Attributes:
        days: Distinct day identifiers in scan order
        capacity: Capacity per day, in the same unit as item weights
    """

    days: tuple[str, ...]
    capacity: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", distinct_days(self.days))
        object.__setattr__(self, "capacity", dict(self.capacity))

    @classmethod
    def from_week(cls, week: WeekSchedule) -> "CapacityCalendar":
        return cls(days=tuple(week.days), capacity=dict(week.capacity))

    def capacity_for(self, day: str) -> float:
        return self.capacity.get(day, 0) or 0

    def total_capacity(self) -> float:
        return total_weekly_capacity(self.days, self.capacity)

    def largest_day(self) -> str | None:
        """Day with the highest capacity; ties go to the earliest day."""
        if not self.days:
            return None
        largest = self.days[0]
        for day in self.days[1:]:
            if self.capacity_for(day) > self.capacity_for(largest):
                largest = day
        return largest
