"""
Schedule resolver: weekday names and "most recent scheduled day".

All dates here are local calendar days (`date.today()`), the same day
definition used by the completion recorder and the progress aggregator.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from habitlab.core.errors import HabitValidationError

# date.weekday() order: Monday == 0
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Display / week order: weeks start on Sunday
WEEK_ORDER = ("Sunday",) + WEEKDAYS[:6]

_BY_LOWER = {name.lower(): name for name in WEEKDAYS}


def _today() -> date:
    return date.today()


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def frequency_days(frequency: Iterable[str]) -> set[str]:
    """Lower-cased weekday names in `frequency`, unknown names dropped."""
    return {d.strip().lower() for d in frequency if d.strip().lower() in _BY_LOWER}


def is_scheduled_on(frequency: Iterable[str], day: date) -> bool:
    return weekday_name(day).lower() in frequency_days(frequency)


def normalize_frequency(frequency: Iterable[str]) -> list[str]:
    """
    Canonical frequency: title-case names, duplicates removed, Sunday first.
    Raises HabitValidationError for an empty list or an unknown day name.
    """
    seen: set[str] = set()
    for raw in frequency:
        key = raw.strip().lower() if isinstance(raw, str) else ""
        if key not in _BY_LOWER:
            raise HabitValidationError(f"Unknown weekday: {raw!r}.", field="frequency")
        seen.add(_BY_LOWER[key])
    if not seen:
        raise HabitValidationError("Please select at least one day.", field="frequency")
    return [d for d in WEEK_ORDER if d in seen]


def start_of_week(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def resolve_scheduled_date(frequency: Iterable[str], reference: date | None = None) -> date:
    """
    Walk back from `reference` to the nearest day whose weekday is in
    `frequency`. Returns `reference` itself when it is a scheduled day.
    """
    ref = reference or _today()
    days = frequency_days(frequency)
    if not days:
        raise HabitValidationError("Habit has no valid scheduled weekday.", field="frequency")

    candidate = ref
    for _ in range(7):
        if weekday_name(candidate).lower() in days:
            return candidate
        candidate -= timedelta(days=1)
    # unreachable: 7 consecutive days cover every weekday
    raise HabitValidationError("Habit has no valid scheduled weekday.", field="frequency")
