"""
Habit store: the ordered habit collection, persisted as one JSON blob.

Public API
----------
HabitStore(kv, key)
  .load()             -> list[Habit]            (raises PersistenceError)
  .load_or_empty()    -> (list[Habit], error)   (never raises on storage errors)
  .get(habit_id)      -> Habit | None
  .create(draft)      -> Habit                  (raises HabitValidationError)
  .delete(habit_id)   -> DeleteResult           (raises PersistenceError on load)
  .save(habits)       -> None                   (one write of the whole collection)
  .lock                                         (serializes read-modify-write)

Every mutation reads the full collection, changes it, and writes the full
collection back. All HabitStore instances share one process-wide lock so two
requests can never interleave their read-modify-write sequences.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from habitlab.core.errors import HabitValidationError, PersistenceError
from habitlab.schemas.habit import Habit, HabitCollection, HabitCreate
from habitlab.services.kv_store import KeyValueStore
from habitlab.services.schedule import normalize_frequency

logger = logging.getLogger(__name__)

DEFAULT_KEY = "@habits"

_STORE_LOCK = threading.RLock()

# Highest id handed out by this process; guards against two creates in the same millisecond.
_last_issued_id = 0


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _next_id(existing: list[Habit]) -> str:
    """Epoch-millisecond id, strictly above every id issued or stored."""
    global _last_issued_id
    floor = _last_issued_id
    for h in existing:
        if h.id.isdigit():
            floor = max(floor, int(h.id))
    candidate = max(int(time.time() * 1000), floor + 1)
    _last_issued_id = candidate
    return str(candidate)


@dataclass
class DeleteResult:
    deleted: bool
    persisted: bool


class HabitStore:
    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY, lock=None):
        self.kv = kv
        self.key = key
        self.lock = lock or _STORE_LOCK

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self) -> list[Habit]:
        raw = self.kv.get(self.key)
        if not raw:
            return []
        try:
            return HabitCollection.validate_json(raw)
        except ValidationError as exc:
            logger.error("Stored habit collection under %s is unreadable: %s", self.key, exc)
            raise PersistenceError("Failed to parse stored habits.", key=self.key) from exc

    def load_or_empty(self) -> tuple[list[Habit], Optional[str]]:
        """Load for display: on failure log, substitute [] and return the message."""
        try:
            return self.load(), None
        except PersistenceError as exc:
            logger.error("Error loading habits: %s", exc.message)
            return [], "Failed to load habits"

    def get(self, habit_id: str) -> Optional[Habit]:
        for habit in self.load():
            if habit.id == habit_id:
                return habit
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, habits: list[Habit]) -> None:
        self.kv.set(self.key, HabitCollection.dump_json(habits, by_alias=True).decode())

    def create(self, draft: HabitCreate, now: Optional[datetime] = None) -> Habit:
        name = draft.name.strip()
        if not name:
            raise HabitValidationError("Please enter a habit name.", field="name")
        frequency = normalize_frequency(draft.frequency)

        ts = now or _now()
        with self.lock:
            habits = self.load()
            habit = Habit(
                id=_next_id(habits),
                name=name,
                description=draft.description.strip(),
                frequency=frequency,
                reminder_time=draft.reminder_time,
                created_at=ts,
                updated_at=ts,
                completed_dates=[],
            )
            self.save(habits + [habit])
        logger.info("Created habit %s (%s) on %s", habit.id, habit.name, ", ".join(frequency))
        return habit

    def delete(self, habit_id: str) -> DeleteResult:
        """
        Remove a habit. Absent ids are a no-op (deleted=False).

        Only the write is forgiving: a failed save is logged and reported as
        persisted=False. A failure to load the collection is raised as
        PersistenceError (HTTP 503), since there is nothing to delete from.
        """
        with self.lock:
            habits = self.load()
            remaining = [h for h in habits if h.id != habit_id]
            if len(remaining) == len(habits):
                logger.info("Delete of unknown habit %s ignored", habit_id)
                return DeleteResult(deleted=False, persisted=True)
            try:
                self.save(remaining)
            except PersistenceError as exc:
                logger.error("Error deleting habit %s: %s", habit_id, exc.message)
                return DeleteResult(deleted=True, persisted=False)
        logger.info("Deleted habit %s", habit_id)
        return DeleteResult(deleted=True, persisted=True)
