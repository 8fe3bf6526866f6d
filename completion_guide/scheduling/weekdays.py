"""Seven-day vocabulary used at the user-facing boundary.

The allocator treats day identifiers as opaque keys; only the service and
CLI layers know that they are weekdays.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Weekday:
    key: str
    name: str
    abbr: str


WEEKDAYS: tuple[Weekday, ...] = (
    Weekday(key="M", name="Monday", abbr="MON"),
    Weekday(key="T", name="Tuesday", abbr="TUES"),
    Weekday(key="W", name="Wednesday", abbr="WED"),
    Weekday(key="Th", name="Thursday", abbr="THUR"),
    Weekday(key="F", name="Friday", abbr="FRI"),
    Weekday(key="S", name="Saturday", abbr="SAT"),
    Weekday(key="Su", name="Sunday", abbr="SUN"),
)

WEEKDAY_KEYS: tuple[str, ...] = tuple(day.key for day in WEEKDAYS)

_BY_KEY = {day.key: day for day in WEEKDAYS}
_LOOKUP = {
    alias.lower(): day.key
    for day in WEEKDAYS
    for alias in (day.key, day.name, day.abbr, day.name[:3])
}


def parse_day(token: str) -> str:
    """Resolve a day key, abbreviation or full name to its key.

    Keys are case-sensitive ("T" is Tuesday, "Th" is Thursday); names and
    abbreviations are not.

    Raises:
        ValueError: If the token names no weekday
    """
    stripped = token.strip()
    if stripped in _BY_KEY:
        return stripped
    key = _LOOKUP.get(stripped.lower())
    if key is None:
        raise ValueError(f"Unknown day '{token}'. Use one of: {', '.join(WEEKDAY_KEYS)}")
    return key


def order_days(days: Iterable[str]) -> list[str]:
    """Sort days Monday-first. Unknown identifiers keep their order after the known ones."""
    unique = list(dict.fromkeys(days))
    known = sorted((d for d in unique if d in _BY_KEY), key=WEEKDAY_KEYS.index)
    unknown = [d for d in unique if d not in _BY_KEY]
    return known + unknown


def day_name(key: str) -> str:
    weekday = _BY_KEY.get(key)
    return weekday.name if weekday else key
