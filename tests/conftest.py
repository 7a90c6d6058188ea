"""
Shared pytest fixtures.

Uses a SQLite file database so no server is required for tests. The
key-value table is emptied before every test: the habit collection is a
single blob, so tests would otherwise see each other's habits.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_habitlab.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from habitlab.core.errors import PersistenceError  # noqa: E402
from habitlab.db.base import Base, get_db  # noqa: E402
from habitlab.main import app  # noqa: E402
from habitlab.models.kv_entry import KeyValueEntry  # noqa: E402
from habitlab.services.habit_store import HabitStore  # noqa: E402
from habitlab.services.kv_store import SqlKeyValueStore  # noqa: E402

SQLITE_URL = os.environ["DATABASE_URL"]

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class MemoryKeyValueStore:
    """In-process key-value store whose reads and writes can be made to fail."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key):
        if self.fail_reads:
            raise PersistenceError(f"Failed to read {key}.", key=key)
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise PersistenceError(f"Failed to write {key}.", key=key)
        self.writes += 1
        self.data[key] = value


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_kv():
    db = TestingSessionLocal()
    try:
        db.query(KeyValueEntry).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def sql_store(db):
    return HabitStore(SqlKeyValueStore(db))


@pytest.fixture()
def kv():
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv):
    return HabitStore(kv)


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
