"""
Key-value persistence backing the habit store and wellness stats.

Public API
----------
KeyValueStore           : protocol: get(key) -> str | None, set(key, value)
SqlKeyValueStore(db)    : implementation over the `kv_entries` table

Every set() commits on its own: one call == one atomic write of the blob.
SQLAlchemy failures are rolled back and surfaced as PersistenceError.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from habitlab.core.errors import PersistenceError
from habitlab.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class SqlKeyValueStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        try:
            row = (
                self.db.query(KeyValueEntry.value)
                .filter(KeyValueEntry.key == key)
                .first()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to read key %s: %s", key, exc)
            raise PersistenceError(f"Failed to read {key}.", key=key) from exc
        return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        try:
            entry = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            if entry is None:
                self.db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to write key %s: %s", key, exc)
            raise PersistenceError(f"Failed to write {key}.", key=key) from exc
