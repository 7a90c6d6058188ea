"""
Habit schemas.

`Habit` and `CompletionEvent` double as the persisted record format: the
habit collection is stored as a JSON array of `Habit` dumped by alias, so
field names on the wire are camelCase (`completedDates`, `isLate`, ...).

POST /habits                → HabitCreate  → Habit
GET  /habits                → HabitListResponse
POST /habits/{id}/complete  → CompletionResponse
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompletionEvent(CamelModel):
    scheduled_date: date = Field(description="Occurrence this completion satisfies.")
    completed_date: date = Field(description="Day the habit was actually marked done.")
    is_late: bool = Field(description="True iff completed_date != scheduled_date.")


class Habit(CamelModel):
    id: str
    name: str
    description: str = ""
    frequency: list[str] = Field(
        description="Full English weekday names, e.g. ['Monday', 'Friday'].",
    )
    reminder_time: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_dates: list[CompletionEvent] = Field(default_factory=list)


HabitCollection = TypeAdapter(list[Habit])


class HabitCreate(CamelModel):
    """Draft submitted by the user. Name and frequency are checked by the store."""
    name: str = Field(max_length=200, examples=["Read 10 min"])
    description: str = Field(default="", max_length=2_000)
    frequency: list[str] = Field(
        default_factory=list,
        examples=[["Monday", "Wednesday", "Friday"]],
    )
    reminder_time: Optional[str] = Field(default=None, examples=["2026-10-18T07:30:00.000Z"])


class HabitListResponse(BaseModel):
    total: int
    items: list[Habit]
    error: Optional[str] = Field(
        default=None,
        description="Set when the stored collection could not be loaded; items is then empty.",
    )


class DeleteHabitResponse(BaseModel):
    deleted: bool = Field(description="False when no habit had this id.")
    persisted: bool = Field(description="False when the write to storage failed.")


class CompletionResponse(BaseModel):
    habit: Habit
    event: Optional[CompletionEvent] = Field(
        default=None,
        description="The event appended, or today's existing event when already completed.",
    )
    recorded: bool = Field(description="False when the habit was already completed today.")
    persisted: bool = Field(description="False when the write to storage failed.")
