"""
Progress aggregator: metrics derived from the full habit collection.

Everything here is a pure function of (habits, today): no queries, no
writes, no incremental state. Callers reload the collection and recompute
after every mutation.

Definitions
-----------
Daily progress
  completed_count = habits with an event completed today
  total_count     = number of habits

Weekly progress (Sunday → Saturday of the week containing today)
  eligible          = habits scheduled on that weekday
  completed         = eligible habits with an event whose scheduledDate OR
                      completedDate is that day (a late completion may land on
                      a different day than the occurrence it satisfies)
  progress          = completed / eligible, 0 when nothing is eligible
  late_completions  = completed habits having ANY late event, not only one
                      for that day

Streak
  Every completedDate on or before today across all habits, pooled and
  sorted newest first (not deduplicated). Walk from today: a gap of 0 or 1
  day to the next date extends the streak and moves the anchor to
  (date - 1); a larger gap stops. Later completions are ignored.
  Several habits completed on the same day each add to the count.

Public API
----------
daily_progress(habits, today)      -> DailyProgress
weekly_progress(habits, today)     -> list[DayProgress]
calculate_streak(habits, today)    -> int
completed_habits(habits)           -> list[CompletedHabit]
compute_progress(habits, today)    -> ProgressSnapshot
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from habitlab.schemas.habit import CompletionEvent, Habit
from habitlab.services.schedule import WEEK_ORDER, frequency_days, start_of_week


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class DailyProgress:
    completed_count: int
    total_count: int


@dataclass
class DayProgress:
    day: str                 # full weekday name, "Sunday" first
    date: date
    progress: float          # 0.0 – 1.0
    late_completions: int


@dataclass
class CompletedHabit:
    habit: Habit
    last_completion: CompletionEvent
    is_late: bool


@dataclass
class ProgressSnapshot:
    today: date
    daily: DailyProgress
    weekly: list[DayProgress]
    streak: int


def _today() -> date:
    return date.today()


def _has_late_event(habit: Habit) -> bool:
    return any(e.completed_date != e.scheduled_date for e in habit.completed_dates)


# ---------------------------------------------------------------------------
# (a) Daily
# ---------------------------------------------------------------------------

def daily_progress(habits: list[Habit], today: Optional[date] = None) -> DailyProgress:
    day = today or _today()
    completed = sum(
        1 for h in habits
        if any(e.completed_date == day for e in h.completed_dates)
    )
    return DailyProgress(completed_count=completed, total_count=len(habits))


# ---------------------------------------------------------------------------
# (b) Weekly
# ---------------------------------------------------------------------------

def weekly_progress(habits: list[Habit], today: Optional[date] = None) -> list[DayProgress]:
    start = start_of_week(today or _today())
    schedules = [(h, frequency_days(h.frequency)) for h in habits]

    week: list[DayProgress] = []
    for offset, name in enumerate(WEEK_ORDER):
        day = start + timedelta(days=offset)
        eligible = [h for h, days in schedules if name.lower() in days]
        completed = [
            h for h in eligible
            if any(e.scheduled_date == day or e.completed_date == day for e in h.completed_dates)
        ]
        week.append(DayProgress(
            day=name,
            date=day,
            progress=len(completed) / len(eligible) if eligible else 0.0,
            late_completions=sum(1 for h in completed if _has_late_event(h)),
        ))
    return week


# ---------------------------------------------------------------------------
# (c) Streak
# ---------------------------------------------------------------------------

def calculate_streak(habits: list[Habit], today: Optional[date] = None) -> int:
    anchor = today or _today()
    # completions after the reference day cannot extend a streak ending on it
    pool = sorted(
        (
            e.completed_date
            for h in habits
            for e in h.completed_dates
            if e.completed_date <= anchor
        ),
        reverse=True,
    )
    streak = 0
    for completed in pool:
        if (anchor - completed).days > 1:
            break
        streak += 1
        anchor = completed - timedelta(days=1)
    return streak


# ---------------------------------------------------------------------------
# (d) Completed habits with their most recent completion
# ---------------------------------------------------------------------------

def completed_habits(habits: list[Habit]) -> list[CompletedHabit]:
    result = []
    for h in habits:
        if not h.completed_dates:
            continue
        last = h.completed_dates[-1]
        result.append(CompletedHabit(
            habit=h,
            last_completion=last,
            is_late=last.completed_date != last.scheduled_date,
        ))
    return result


# ---------------------------------------------------------------------------
# Public: main entry point
# ---------------------------------------------------------------------------

def compute_progress(habits: list[Habit], today: Optional[date] = None) -> ProgressSnapshot:
    day = today or _today()
    return ProgressSnapshot(
        today=day,
        daily=daily_progress(habits, day),
        weekly=weekly_progress(habits, day),
        streak=calculate_streak(habits, day),
    )
