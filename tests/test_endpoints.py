"""
Integration tests for API endpoints using the SQLite test DB.

Dates are passed explicitly with ?today= so results do not depend on the
day the suite runs. Week: Sunday 2026-10-18 → Saturday 2026-10-24.
"""
import pytest

MWF = ["Monday", "Wednesday", "Friday"]
EVERY_DAY = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _create(client, name="Read 10 min", frequency=None, **extra) -> dict:
    r = client.post("/habits", json={
        "name": name,
        "frequency": MWF if frequency is None else frequency,
        **extra,
    })
    assert r.status_code == 201, r.text
    return r.json()


def _complete(client, habit_id: str, today: str) -> dict:
    r = client.post(f"/habits/{habit_id}/complete?today={today}")
    assert r.status_code == 200, r.text
    return r.json()


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestHabits:
    def test_create(self, client):
        body = _create(client, description="before bed", reminderTime="21:30")
        assert body["name"] == "Read 10 min"
        assert body["frequency"] == MWF
        assert body["reminderTime"] == "21:30"
        assert body["completedDates"] == []
        assert body["createdAt"] == body["updatedAt"]

    def test_list(self, client):
        a = _create(client, name="a")
        b = _create(client, name="b")
        r = client.get("/habits")
        assert r.status_code == 200
        body = r.json()
        assert body["total"] == 2
        assert [h["id"] for h in body["items"]] == [a["id"], b["id"]]
        assert body["error"] is None

    def test_get_and_404(self, client):
        habit = _create(client)
        assert client.get(f"/habits/{habit['id']}").json() == habit
        r = client.get("/habits/unknown")
        assert r.status_code == 404
        assert r.json()["code"] == "HABIT_NOT_FOUND"

    def test_delete(self, client):
        habit = _create(client)
        r = client.delete(f"/habits/{habit['id']}")
        assert r.status_code == 200
        assert r.json() == {"deleted": True, "persisted": True}
        assert client.get("/habits").json()["total"] == 0

    def test_delete_unknown_is_noop(self, client):
        _create(client)
        r = client.delete("/habits/unknown")
        assert r.status_code == 200
        assert r.json() == {"deleted": False, "persisted": True}
        assert client.get("/habits").json()["total"] == 1


class TestComplete:
    def test_late_completion(self, client):
        habit = _create(client, frequency=MWF)
        body = _complete(client, habit["id"], "2026-10-20")
        assert body["recorded"] is True
        assert body["persisted"] is True
        assert body["event"] == {
            "scheduledDate": "2026-10-19",
            "completedDate": "2026-10-20",
            "isLate": True,
        }
        assert body["habit"]["completedDates"] == [body["event"]]

    def test_on_time_completion(self, client):
        habit = _create(client, frequency=EVERY_DAY)
        event = _complete(client, habit["id"], "2026-10-20")["event"]
        assert event["isLate"] is False
        assert event["scheduledDate"] == event["completedDate"] == "2026-10-20"

    def test_idempotent_same_day(self, client):
        habit = _create(client)
        _complete(client, habit["id"], "2026-10-21")
        second = _complete(client, habit["id"], "2026-10-21")
        assert second["recorded"] is False
        stored = client.get(f"/habits/{habit['id']}").json()
        assert len(stored["completedDates"]) == 1

    def test_load_after_complete_matches(self, client):
        habit = _create(client)
        body = _complete(client, habit["id"], "2026-10-20")
        assert client.get("/habits").json()["items"] == [body["habit"]]

    def test_unknown_habit_404(self, client):
        r = client.post("/habits/missing/complete?today=2026-10-20")
        assert r.status_code == 404
        assert r.json()["code"] == "HABIT_NOT_FOUND"


class TestProgress:
    def test_no_habits(self, client):
        body = client.get("/progress?today=2026-10-20").json()
        assert body["today"] == "2026-10-20"
        assert body["daily"] == {"completedCount": 0, "totalCount": 0}
        assert body["streak"] == 0
        assert len(body["weekly"]) == 7
        assert all(d["progress"] == 0 and d["lateCompletions"] == 0 for d in body["weekly"])

    def test_after_completions(self, client):
        daily = _create(client, name="daily", frequency=EVERY_DAY)
        mwf = _create(client, name="mwf", frequency=MWF)
        _complete(client, daily["id"], "2026-10-19")
        _complete(client, daily["id"], "2026-10-20")
        _complete(client, mwf["id"], "2026-10-20")

        body = client.get("/progress?today=2026-10-20").json()
        assert body["daily"] == {"completedCount": 2, "totalCount": 2}
        assert body["streak"] == 3

        week = {d["day"]: d for d in body["weekly"]}
        assert week["Sunday"]["date"] == "2026-10-18"
        assert week["Monday"] == {
            "day": "Monday", "date": "2026-10-19", "progress": 1.0, "lateCompletions": 1,
        }
        assert week["Tuesday"]["progress"] == 1.0
        assert week["Tuesday"]["lateCompletions"] == 0
        assert week["Wednesday"]["progress"] == 0

    def test_weekly_endpoint(self, client):
        body = client.get("/progress/weekly?today=2026-10-24").json()
        assert [d["day"] for d in body] == EVERY_DAY
        assert body[0]["date"] == "2026-10-18"
        assert body[6]["date"] == "2026-10-24"

    def test_streak_endpoint(self, client):
        habit = _create(client, frequency=EVERY_DAY)
        _complete(client, habit["id"], "2026-10-19")
        _complete(client, habit["id"], "2026-10-20")
        assert client.get("/progress/streak?today=2026-10-20").json() == {
            "today": "2026-10-20", "streak": 2,
        }
        # a two-day gap to today breaks it
        assert client.get("/progress/streak?today=2026-10-22").json()["streak"] == 0

    def test_completed_habits(self, client):
        done = _create(client, name="done")
        _create(client, name="never")
        _complete(client, done["id"], "2026-10-20")
        body = client.get("/progress/completed").json()
        assert len(body) == 1
        assert body[0]["habit"]["id"] == done["id"]
        assert body[0]["lastCompletion"]["completedDate"] == "2026-10-20"
        assert body[0]["isLate"] is True

    @pytest.mark.parametrize("path", ["/progress", "/progress/weekly", "/progress/streak"])
    def test_defaults_to_today(self, client, path):
        assert client.get(path).status_code == 200
