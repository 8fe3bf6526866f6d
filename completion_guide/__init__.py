"""Completion guide: weekly study schedule planner.

Allocates a catalog of weighted tasks into weeks and days under per-day
time limits, and re-plans single weeks when the available time changes.
"""

__version__ = "0.1.0"
