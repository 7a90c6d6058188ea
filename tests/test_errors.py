"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest

from habitlab.core.errors import (
    HabitNotFoundError,
    HabitValidationError,
    PersistenceError,
    StatsValidationError,
)
from habitlab.dependencies import get_habit_store
from habitlab.main import app
from habitlab.schemas.habit import HabitCreate
from habitlab.services.habit_store import HabitStore


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_habit_validation_error(self):
        err = HabitValidationError("Please select at least one day.", field="frequency")
        assert err.http_status == 422
        assert err.code == "HABIT_VALIDATION_FAILED"
        assert err.to_dict()["details"] == {"field": "frequency"}

    def test_persistence_error(self):
        err = PersistenceError("Failed to write @habits.", key="@habits")
        assert err.http_status == 503
        assert err.code == "PERSISTENCE_ERROR"
        assert err.details["key"] == "@habits"

    def test_not_found_error(self):
        err = HabitNotFoundError("123")
        assert err.http_status == 404
        assert err.code == "HABIT_NOT_FOUND"
        assert "123" in err.message

    def test_stats_validation_error(self):
        err = StatsValidationError("sleep_hours", -1)
        assert err.http_status == 422
        assert err.details == {"stat": "sleep_hours", "value": -1}

    def test_to_dict_without_details(self):
        d = HabitValidationError("bad").to_dict()
        assert d == {"code": "HABIT_VALIDATION_FAILED", "message": "bad"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_empty_frequency(self, client):
        r = client.post("/habits", json={"name": "Walk", "frequency": []})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "HABIT_VALIDATION_FAILED"
        assert body["details"]["field"] == "frequency"

    def test_blank_name(self, client):
        r = client.post("/habits", json={"name": "  ", "frequency": ["Monday"]})
        assert r.status_code == 422
        assert r.json()["details"]["field"] == "name"

    def test_unknown_day(self, client):
        r = client.post("/habits", json={"name": "Walk", "frequency": ["Mon"]})
        assert r.status_code == 422
        assert r.json()["code"] == "HABIT_VALIDATION_FAILED"

    def test_missing_name_is_request_validation_error(self, client):
        r = client.post("/habits", json={"frequency": ["Monday"]})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("name" in f for f in fields)

    def test_bad_today_param(self, client):
        r = client.get("/progress?today=not-a-date")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestPersistenceErrors:
    @pytest.fixture()
    def broken_client(self, client, kv):
        kv.fail_reads = True
        app.dependency_overrides[get_habit_store] = lambda: HabitStore(kv)
        yield client
        app.dependency_overrides.pop(get_habit_store, None)

    def test_list_substitutes_empty_collection(self, broken_client):
        r = broken_client.get("/habits")
        assert r.status_code == 200
        body = r.json()
        assert body["items"] == []
        assert body["total"] == 0
        assert body["error"] == "Failed to load habits"

    def test_progress_still_renders(self, broken_client):
        r = broken_client.get("/progress?today=2026-10-20")
        assert r.status_code == 200
        body = r.json()
        assert body["daily"] == {"completedCount": 0, "totalCount": 0}
        assert body["error"] == "Failed to load habits"

    def test_create_reports_503(self, broken_client):
        r = broken_client.post("/habits", json={"name": "Walk", "frequency": ["Monday"]})
        assert r.status_code == 503
        assert r.json()["code"] == "PERSISTENCE_ERROR"

    def test_delete_reports_503(self, broken_client):
        r = broken_client.delete("/habits/123")
        assert r.status_code == 503
        assert r.json()["code"] == "PERSISTENCE_ERROR"

    def test_complete_reports_503(self, broken_client):
        r = broken_client.post("/habits/123/complete?today=2026-10-20")
        assert r.status_code == 503
        assert r.json()["code"] == "PERSISTENCE_ERROR"


class TestDeleteWriteFailure:
    def test_delete_reports_not_persisted(self, client, kv):
        store = HabitStore(kv)
        habit = store.create(HabitCreate(name="Walk", frequency=["Monday"]))
        kv.fail_writes = True
        app.dependency_overrides[get_habit_store] = lambda: store
        try:
            r = client.delete(f"/habits/{habit.id}")
        finally:
            app.dependency_overrides.pop(get_habit_store, None)
        assert r.status_code == 200
        assert r.json() == {"deleted": True, "persisted": False}
