"""Scheduling module - greedy weekly allocation of weighted tasks.

This module provides:
- Frozen schedule types (WorkItem, DayAssignment, WeekSchedule)
- Capacity calendar and weekly capacity totals
- Greedy first-fit allocation across weeks
- Single-week re-allocation with pinned (completed) items
"""

from completion_guide.scheduling.calendar import CapacityCalendar, total_weekly_capacity
from completion_guide.scheduling.greedy import pack, pack_calendar
from completion_guide.scheduling.repack import repack
from completion_guide.scheduling.types import DayAssignment, RepackResult, TaskStatus, WeekSchedule, WorkItem

__all__ = [
    "CapacityCalendar",
    "DayAssignment",
    "RepackResult",
    "TaskStatus",
    "WeekSchedule",
    "WorkItem",
    "pack",
    "pack_calendar",
    "repack",
    "total_weekly_capacity",
]
