"""Domain-specific errors for the completion guide.

The allocator itself never raises for capacity problems; these errors
belong to the boundary layers (schedule service, loaders, CLI input).
"""


class GuideError(Exception):
    """Base exception for all completion guide errors."""

    pass


class ScheduleInputError(GuideError):
    """Raised when a schedule request is incomplete (e.g., no days selected)."""

    pass


class WeekNotFoundError(GuideError):
    """Raised when an operation targets a week number that is not in the schedule."""

    pass


class TimeInputError(GuideError):
    """Raised when a time entry cannot be parsed or is out of range."""

    pass


class CatalogLoadError(GuideError):
    """Raised when the task catalog cannot be fetched or decoded."""

    pass
