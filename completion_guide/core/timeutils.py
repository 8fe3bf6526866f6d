"""Conversion between minute counts and the "Xh YYm" display format.

Day capacities are entered and stored in minutes; these helpers parse the
free-form text a user types and render minute counts back for display.
"""

import math
import re

from pydantic import BaseModel

_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*h(?:our)?s?", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+(?:\.\d+)?)\s*m(?:inute)?s?", re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

MAX_DAY_MINUTES = 24 * 60


class TimeInputResult(BaseModel):
    """Outcome of validating a time entry.

    Attributes:
        valid: Whether the entry is usable
        minutes: Parsed minutes (0 when invalid)
        error: Human-readable reason when invalid
    """

    valid: bool
    minutes: int
    error: str | None = None


def minutes_to_display(minutes: int) -> str:
    """Render minutes as "Xh YYm" (e.g. 90 -> "1h 30m", 120 -> "2h", 45 -> "45m")."""
    if minutes == 0:
        return "0m"

    hours, mins = divmod(minutes, 60)

    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def display_to_minutes(text: str) -> int:
    """Parse a time entry into minutes.

    Accepts "2h 30m", "2h", "30m", and bare numbers which are read as
    decimal hours ("2" -> 120, "2.5" -> 150). Empty text is zero.
    """
    trimmed = text.strip().lower()
    if not trimmed:
        return 0

    total = 0

    hour_match = _HOURS_RE.search(trimmed)
    if hour_match:
        total += math.floor(float(hour_match.group(1)) * 60)

    minute_match = _MINUTES_RE.search(trimmed)
    if minute_match:
        total += math.floor(float(minute_match.group(1)))

    if total == 0:
        number_match = _LEADING_NUMBER_RE.match(trimmed)
        if number_match:
            total = math.floor(float(number_match.group(0)) * 60)

    return total


def round_to_five_minutes(minutes: float) -> int:
    """Round to the nearest 5-minute increment (halves round up)."""
    return int(math.floor(minutes / 5 + 0.5)) * 5


def validate_time_input(text: str, max_minutes: int = MAX_DAY_MINUTES) -> TimeInputResult:
    """Parse and range-check a time entry."""
    try:
        minutes = display_to_minutes(text)
    except ValueError:
        return TimeInputResult(valid=False, minutes=0, error="Invalid time format")

    if minutes < 0:
        return TimeInputResult(valid=False, minutes=0, error="Time cannot be negative")

    if minutes > max_minutes:
        return TimeInputResult(
            valid=False,
            minutes=0,
            error=f"Time cannot exceed {minutes_to_display(max_minutes)}",
        )

    return TimeInputResult(valid=True, minutes=minutes)
