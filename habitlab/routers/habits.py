"""
Habits router.

GET    /habits                 : full collection (empty + error when unreadable)
POST   /habits                 : create a habit
GET    /habits/{id}            : single habit
DELETE /habits/{id}            : delete (no-op for unknown ids)
POST   /habits/{id}/complete   : record today's completion
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from habitlab.core.errors import HabitNotFoundError
from habitlab.dependencies import get_habit_store
from habitlab.schemas.habit import (
    CompletionResponse,
    DeleteHabitResponse,
    Habit,
    HabitCreate,
    HabitListResponse,
)
from habitlab.services.completion import complete_habit
from habitlab.services.habit_store import HabitStore

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get(
    "",
    response_model=HabitListResponse,
    summary="List all habits in creation order",
)
def list_habits(store: HabitStore = Depends(get_habit_store)):
    """
    Return every habit with its full completion history.

    If the stored collection cannot be read, `items` is empty and `error`
    carries a message so clients can still render.
    """
    habits, error = store.load_or_empty()
    return HabitListResponse(total=len(habits), items=habits, error=error)


@router.post(
    "",
    response_model=Habit,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
    responses={
        201: {"description": "Habit created."},
        422: {"description": "Empty name, or empty / unknown frequency."},
        503: {"description": "The collection could not be persisted."},
    },
)
def create_habit(payload: HabitCreate, store: HabitStore = Depends(get_habit_store)):
    return store.create(payload)


@router.get(
    "/{habit_id}",
    response_model=Habit,
    summary="Get a single habit",
    responses={404: {"description": "No habit with this id."}},
)
def get_habit(habit_id: str, store: HabitStore = Depends(get_habit_store)):
    habit = store.get(habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


@router.delete(
    "/{habit_id}",
    response_model=DeleteHabitResponse,
    summary="Delete a habit",
    responses={503: {"description": "The collection could not be read."}},
)
def delete_habit(habit_id: str, store: HabitStore = Depends(get_habit_store)):
    """
    Deleting an unknown id is not an error: `deleted` is false.
    If the write fails the habit is reported deleted with `persisted` false.
    """
    result = store.delete(habit_id)
    return DeleteHabitResponse(deleted=result.deleted, persisted=result.persisted)


@router.post(
    "/{habit_id}/complete",
    response_model=CompletionResponse,
    summary="Mark a habit done for today",
    responses={
        200: {"description": "Completion recorded, or already recorded today."},
        404: {"description": "No habit with this id."},
        503: {"description": "The collection could not be read."},
    },
)
def complete(
    habit_id: str,
    today: Optional[date] = Query(
        default=None,
        description="Local calendar day of the completion. Defaults to today.",
        examples=["2026-10-20"],
    ),
    store: HabitStore = Depends(get_habit_store),
):
    """
    Append a completion event for `today`.

    - The scheduled date is the most recent day on or before `today` that the
      habit is scheduled for; the event is late when it differs from `today`.
    - A second call on the same day changes nothing (`recorded` is false).
    - If the write fails the response still carries the updated habit with
      `persisted` false.
    """
    result = complete_habit(store, habit_id, today=today)
    return CompletionResponse(
        habit=result.habit,
        event=result.event,
        recorded=result.recorded,
        persisted=result.persisted,
    )
