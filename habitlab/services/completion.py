"""
Completion recorder.

complete_habit(store, habit_id, today, now) -> CompletionResult

  1. Unknown habit            → HabitNotFoundError (logged)
  2. Already completed today  → no-op, recorded=False, nothing written
  3. Otherwise                → resolve scheduled date, append event,
                                bump updatedAt, persist

A failed write is logged and swallowed: the result carries the in-memory
habit with persisted=False and nothing is rolled back. A failed load is not
swallowed; PersistenceError reaches the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from habitlab.core.errors import HabitNotFoundError, PersistenceError
from habitlab.schemas.habit import CompletionEvent, Habit
from habitlab.services.habit_store import HabitStore
from habitlab.services.schedule import resolve_scheduled_date

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    habit: Habit
    event: Optional[CompletionEvent]
    recorded: bool
    persisted: bool


def _today() -> date:
    return date.today()


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def build_event(frequency: list[str], today: date) -> CompletionEvent:
    scheduled = resolve_scheduled_date(frequency, today)
    return CompletionEvent(
        scheduled_date=scheduled,
        completed_date=today,
        is_late=scheduled != today,
    )


def complete_habit(
    store: HabitStore,
    habit_id: str,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> CompletionResult:
    """
    Record a completion of `habit_id` on `today`.

    The collection is loaded under the store lock. A load failure is raised
    as PersistenceError (HTTP 503); only the final write is swallowed.
    """
    day = today or _today()

    with store.lock:
        habits = store.load()
        index = next((i for i, h in enumerate(habits) if h.id == habit_id), None)
        if index is None:
            logger.warning("Completion for unknown habit %s", habit_id)
            raise HabitNotFoundError(habit_id)

        habit = habits[index]
        existing = next((e for e in habit.completed_dates if e.completed_date == day), None)
        if existing is not None:
            logger.debug("Habit %s already completed on %s", habit_id, day)
            return CompletionResult(habit=habit, event=existing, recorded=False, persisted=True)

        event = build_event(habit.frequency, day)
        updated = habit.model_copy(update={
            "completed_dates": [*habit.completed_dates, event],
            "updated_at": now or _now(),
        })
        habits[index] = updated

        persisted = True
        try:
            store.save(habits)
        except PersistenceError as exc:
            logger.error("Error completing habit %s: %s", habit_id, exc.message)
            persisted = False

    logger.info(
        "Habit %s completed on %s for %s%s",
        habit_id, day, event.scheduled_date, " (late)" if event.is_late else "",
    )
    return CompletionResult(habit=updated, event=event, recorded=True, persisted=persisted)
