"""
Wellness stats: last-logged sleep hours, meditation minutes, display name.

Each value lives under its own key, JSON-encoded. Last write wins; there is
no history.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from habitlab.core.config import settings
from habitlab.core.errors import PersistenceError, StatsValidationError
from habitlab.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "User"


class StatsService:
    def __init__(
        self,
        kv: KeyValueStore,
        sleep_key: str = settings.SLEEP_STORAGE_KEY,
        meditation_key: str = settings.MEDITATION_STORAGE_KEY,
        user_name_key: str = settings.USER_NAME_STORAGE_KEY,
    ):
        self.kv = kv
        self.sleep_key = sleep_key
        self.meditation_key = meditation_key
        self.user_name_key = user_name_key

    def _read(self, key: str):
        raw = self.kv.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.error("Stored value under %s is unreadable: %s", key, exc)
            raise PersistenceError(f"Failed to parse {key}.", key=key) from exc

    def _log_positive(self, key: str, stat: str, value: float) -> float:
        if value is None or value <= 0:
            raise StatsValidationError(stat, value)
        self.kv.set(key, json.dumps(value))
        logger.info("Logged %s=%s", stat, value)
        return value

    def log_sleep(self, hours: float) -> float:
        return self._log_positive(self.sleep_key, "sleep_hours", hours)

    def get_sleep(self) -> Optional[float]:
        return self._read(self.sleep_key)

    def log_meditation(self, minutes: float) -> float:
        return self._log_positive(self.meditation_key, "meditation_minutes", minutes)

    def get_meditation(self) -> Optional[float]:
        return self._read(self.meditation_key)

    def set_user_name(self, name: str) -> str:
        cleaned = name.strip() if isinstance(name, str) else ""
        if not cleaned:
            raise StatsValidationError("user_name", name)
        # stored as plain text, not JSON
        self.kv.set(self.user_name_key, cleaned)
        return cleaned

    def get_user_name(self) -> str:
        return self.kv.get(self.user_name_key) or DEFAULT_USER_NAME
