"""Advisory checks computed against allocator output.

Neither check is an allocator failure. The unallocated check guards the
completeness guarantee; the date check compares week count with a target.
"""

import math
from collections.abc import Sequence
from datetime import date

from loguru import logger
from pydantic import BaseModel

from completion_guide.scheduling.types import WeekSchedule


class ScheduleWarnings(BaseModel):
    """Warning flags shown with a generated schedule.

    Attributes:
        unallocated_tasks: Placed item count differs from the catalog size
        exceeded_date: More weeks were produced than remain before the target date
    """

    unallocated_tasks: bool = False
    exceeded_date: bool = False

    @property
    def any(self) -> bool:
        return self.unallocated_tasks or self.exceeded_date


def weeks_until(target: date, today: date) -> int:
    """Whole weeks (rounded up) between today and the target date; 0 once it has passed."""
    return max(0, math.ceil((target - today).days / 7))


def allocated_count(weeks: Sequence[WeekSchedule]) -> int:
    return sum(len(week.tasks) for week in weeks)


def compute_warnings(
    weeks: Sequence[WeekSchedule],
    catalog_size: int,
    completion_date: date,
    today: date,
) -> ScheduleWarnings:
    placed = allocated_count(weeks)
    available_weeks = weeks_until(completion_date, today)

    warnings = ScheduleWarnings(
        unallocated_tasks=placed != catalog_size,
        exceeded_date=len(weeks) > available_weeks,
    )

    if warnings.unallocated_tasks:
        logger.warning(
            "Allocated task count does not match catalog size",
            allocated=placed,
            catalog_size=catalog_size,
        )
    if warnings.exceeded_date:
        logger.info(
            "Schedule runs past the completion date",
            weeks=len(weeks),
            weeks_available=available_weeks,
            completion_date=completion_date.isoformat(),
        )
    return warnings
