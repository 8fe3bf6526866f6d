"""Domain types for task scheduling.

Every value here is frozen: pack operations build new DayAssignment and
WeekSchedule values rather than mutating their inputs.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["available", "assigned", "completed"]


class WorkItem(BaseModel):
    """Indivisible unit of schedulable work.

    Attributes:
        id: Unique identifier within a run
        weight: Cost in capacity units (minutes), never negative
        payload: Descriptive fields carried through unchanged (module, unit, page, ...)
        status: Lifecycle tag of this copy
    """

    model_config = ConfigDict(frozen=True)

    id: int
    weight: float = Field(ge=0)
    payload: dict[str, Any] = Field(default_factory=dict)
    status: TaskStatus = "available"

    def with_status(self, status: TaskStatus) -> "WorkItem":
        return self.model_copy(update={"status": status})


class DayAssignment(BaseModel):
    """One day within one week.

    Attributes:
        day: Day identifier
        tasks: Items in placement order
        hours_used: Sum of the items' weights
    """

    model_config = ConfigDict(frozen=True)

    day: str
    tasks: tuple[WorkItem, ...] = ()
    hours_used: float = 0.0


class WeekSchedule(BaseModel):
    """Ordered day assignments sharing one capacity calendar.

    Attributes:
        week_number: 1-based week number
        days: Day identifiers of this week's calendar, in order
        capacity: Capacity per calendar day for this week
        day_assignments: One assignment per calendar day, followed by any day
            kept only for pinned items after it was dropped from the calendar.
            Such days appear in neither ``days`` nor ``capacity``.
    """

    model_config = ConfigDict(frozen=True)

    week_number: int
    days: tuple[str, ...]
    capacity: dict[str, float]
    day_assignments: tuple[DayAssignment, ...]

    @property
    def tasks(self) -> list[WorkItem]:
        """All items of the week, flattened in day order."""
        return [task for assignment in self.day_assignments for task in assignment.tasks]

    def assignment_for(self, day: str) -> DayAssignment | None:
        for assignment in self.day_assignments:
            if assignment.day == day:
                return assignment
        return None


class RepackResult(BaseModel):
    """Result of re-packing a single week.

    Attributes:
        updated_week: The week rebuilt on its new calendar
        leftover: Movable items that did not fit, in their original order
    """

    model_config = ConfigDict(frozen=True)

    updated_week: WeekSchedule
    leftover: tuple[WorkItem, ...] = ()
