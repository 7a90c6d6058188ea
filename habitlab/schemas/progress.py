"""
Progress schemas.

GET /progress            → ProgressResponse
GET /progress/weekly     → list[DayProgressResponse]
GET /progress/streak     → StreakResponse
GET /progress/completed  → list[CompletedHabitResponse]
"""
from pydantic import BaseModel, Field

from habitlab.schemas.habit import CamelModel, CompletionEvent, Habit


class DailyProgressResponse(CamelModel):
    completed_count: int = Field(description="Habits with a completion dated today.")
    total_count: int = Field(description="All habits.")


class DayProgressResponse(CamelModel):
    day: str = Field(description='Full weekday name, "Sunday" first.')
    date: str = Field(description="ISO date of that weekday in the current week.")
    progress: float = Field(description="Completed / eligible habits. Range: 0.0–1.0.")
    late_completions: int = Field(
        description="Completed habits that have any late completion on record.",
    )


class ProgressResponse(BaseModel):
    today: str
    daily: DailyProgressResponse
    weekly: list[DayProgressResponse] = Field(description="Sunday → Saturday.")
    streak: int
    error: str | None = None


class StreakResponse(BaseModel):
    today: str
    streak: int


class CompletedHabitResponse(CamelModel):
    habit: Habit
    last_completion: CompletionEvent
    is_late: bool
