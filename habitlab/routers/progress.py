"""
Progress router: metrics recomputed from the stored habit collection.

GET /progress            : daily count, weekly breakdown, streak
GET /progress/weekly     : Sunday → Saturday breakdown only
GET /progress/streak     : streak only
GET /progress/completed  : habits with at least one completion
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from habitlab.dependencies import get_habit_store
from habitlab.schemas.progress import (
    CompletedHabitResponse,
    DailyProgressResponse,
    DayProgressResponse,
    ProgressResponse,
    StreakResponse,
)
from habitlab.services.habit_store import HabitStore
from habitlab.services.progress import (
    DayProgress,
    calculate_streak,
    completed_habits,
    compute_progress,
    weekly_progress,
)

router = APIRouter(prefix="/progress", tags=["progress"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _day_to_response(d: DayProgress) -> DayProgressResponse:
    return DayProgressResponse(
        day=d.day,
        date=str(d.date),
        progress=d.progress,
        late_completions=d.late_completions,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=ProgressResponse,
    summary="All progress metrics for a day",
)
def get_progress(
    today: Optional[date] = Query(
        default=None,
        description="Local calendar day to compute for. Defaults to today.",
        examples=["2026-10-20"],
    ),
    store: HabitStore = Depends(get_habit_store),
):
    """
    ### Metrics
    | Field | Meaning |
    |---|---|
    | `daily.completedCount` | habits completed on `today` |
    | `daily.totalCount` | all habits |
    | `weekly[].progress` | completed / scheduled habits per weekday |
    | `weekly[].lateCompletions` | completed habits with any late completion |
    | `streak` | consecutive days with a completion, ending today or yesterday |
    """
    habits, error = store.load_or_empty()
    snapshot = compute_progress(habits, today)
    return ProgressResponse(
        today=str(snapshot.today),
        daily=DailyProgressResponse(
            completed_count=snapshot.daily.completed_count,
            total_count=snapshot.daily.total_count,
        ),
        weekly=[_day_to_response(d) for d in snapshot.weekly],
        streak=snapshot.streak,
        error=error,
    )


@router.get(
    "/weekly",
    response_model=list[DayProgressResponse],
    summary="Per-weekday completion ratios for the current week",
)
def get_weekly_progress(
    today: Optional[date] = Query(
        default=None,
        description="Local calendar day to compute for. Defaults to today.",
        examples=["2026-10-20"],
    ),
    store: HabitStore = Depends(get_habit_store),
):
    habits, _ = store.load_or_empty()
    return [_day_to_response(d) for d in weekly_progress(habits, today)]


@router.get(
    "/streak",
    response_model=StreakResponse,
    summary="Current streak",
)
def get_streak(
    today: Optional[date] = Query(
        default=None,
        description="Local calendar day to compute for. Defaults to today.",
        examples=["2026-10-20"],
    ),
    store: HabitStore = Depends(get_habit_store),
):
    habits, _ = store.load_or_empty()
    day = today or date.today()
    return StreakResponse(today=str(day), streak=calculate_streak(habits, day))


@router.get(
    "/completed",
    response_model=list[CompletedHabitResponse],
    summary="Habits with at least one completion and their latest one",
)
def get_completed_habits(store: HabitStore = Depends(get_habit_store)):
    habits, _ = store.load_or_empty()
    return [
        CompletedHabitResponse(
            habit=c.habit,
            last_completion=c.last_completion,
            is_late=c.is_late,
        )
        for c in completed_habits(habits)
    ]
