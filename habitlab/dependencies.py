from fastapi import Depends
from sqlalchemy.orm import Session

from habitlab.core.config import settings
from habitlab.db.base import get_db
from habitlab.services.habit_store import HabitStore
from habitlab.services.kv_store import SqlKeyValueStore
from habitlab.services.stats import StatsService


def get_habit_store(db: Session = Depends(get_db)) -> HabitStore:
    return HabitStore(SqlKeyValueStore(db), key=settings.HABITS_STORAGE_KEY)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(SqlKeyValueStore(db))
