"""Tests for the JSON API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from gym_logbook.services.users import UserService
from gym_logbook.web import create_app


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def owner_headers(client, settings):
    owner, _ = asyncio.run(UserService(settings).ensure_owner("Owner", "admin"))
    return {"X-User-Id": str(owner.id)}


@pytest.fixture
def member_id(client, owner_headers):
    response = client.post(
        "/users", json={"name": "Alex", "password": "secret"}, headers=owner_headers
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def plan(client, owner_headers, member_id):
    """Day 1 = [Squat, Bench Press], day 2 = [Pull Up]."""
    ids = {}
    for name in ("Squat", "Bench Press", "Pull Up"):
        response = client.post("/exercises", json={"name": name}, headers=owner_headers)
        assert response.status_code == 201
        ids[name] = response.json()["id"]

    for name, day in (("Squat", 1), ("Bench Press", 1), ("Pull Up", 2)):
        response = client.post(
            "/workout-sequence",
            json={"user_id": member_id, "exercise_id": ids[name], "day_number": day},
            headers=owner_headers,
        )
        assert response.status_code == 201
    return ids


class TestBasics:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_login(self, client, member_id):
        response = client.post("/users/login", json={"name": "Alex", "password": "secret"})
        assert response.status_code == 200
        assert response.json()["id"] == member_id
        assert "password_hash" not in response.json()

        response = client.post("/users/login", json={"name": "Alex", "password": "nope"})
        assert response.status_code == 401
        assert "error" in response.json()

    def test_body_validation_is_400(self, client):
        response = client.post("/users/login", json={"name": "Alex"})
        assert response.status_code == 400
        assert "password" in response.json()["error"]

    def test_missing_query_param_is_400(self, client):
        response = client.get("/user-progress")
        assert response.status_code == 400


class TestOwnerEndpoints:

    def test_requires_header(self, client, owner_headers):
        response = client.post("/users", json={"name": "Sam", "password": "pw"})
        assert response.status_code == 401

    def test_member_is_forbidden(self, client, member_id):
        response = client.post(
            "/users",
            json={"name": "Sam", "password": "pw"},
            headers={"X-User-Id": str(member_id)},
        )
        assert response.status_code == 403

    def test_user_crud(self, client, owner_headers, member_id):
        response = client.put(
            f"/users/{member_id}", json={"avatar_color": "#123456"}, headers=owner_headers
        )
        assert response.json()["avatar_color"] == "#123456"

        names = [u["name"] for u in client.get("/users", params={"role": "user"}).json()]
        assert names == ["Alex"]

        response = client.delete(f"/users/{member_id}", headers=owner_headers)
        assert response.status_code == 200
        response = client.delete(f"/users/{member_id}", headers=owner_headers)
        assert response.status_code == 404

    def test_classify(self, client):
        response = client.get("/exercises/classify", params={"name": "Hammer Curl"})
        assert response.json()["category"] == "arm"

    def test_list_by_category(self, client, plan):
        names = [e["name"] for e in client.get("/exercises", params={"category": "leg"}).json()]
        assert names == ["Squat"]

        response = client.get("/exercises", params={"category": "cardio"})
        assert response.status_code == 400

    def test_unknown_exercise_is_404(self, client, owner_headers):
        response = client.get("/exercises/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Exercise 999 not found"}


class TestProgression:

    def test_sessions_advance_the_day(self, client, member_id, plan):
        today = client.get("/user-progress/today", params={"user_id": member_id}).json()
        assert today["day_number"] == 1
        assert [e["name"] for e in today["exercises"]] == ["Squat", "Bench Press"]

        response = client.post(
            "/workout-sessions", json={"user_id": member_id, "exercise_id": plan["Squat"]}
        )
        assert response.status_code == 200
        assert response.json()["advanced"] is False

        response = client.post(
            "/workout-sessions", json={"user_id": member_id, "exercise_id": plan["Bench Press"]}
        )
        body = response.json()
        assert body["advanced"] is True
        assert body["session"]["is_complete"] is True
        assert body["progress"]["current_day_number"] == 2

        sessions = client.get(
            "/workout-sessions", params={"user_id": member_id, "day_number": 1}
        ).json()
        assert len(sessions) == 1

    def test_manual_advance_and_wrap(self, client, member_id, plan):
        client.post("/user-progress", json={"user_id": member_id})
        response = client.post("/user-progress", json={"user_id": member_id})

        assert response.json()["current_day_number"] == 1
        assert response.json()["total_workouts_completed"] == 2

    def test_set_day_and_reset(self, client, owner_headers, member_id, plan):
        response = client.post(
            "/user-progress/set-day",
            json={"user_id": member_id, "day_number": 3},
            headers=owner_headers,
        )
        assert response.status_code == 400

        response = client.post(
            "/user-progress/set-day",
            json={"user_id": member_id, "day_number": 2},
            headers=owner_headers,
        )
        assert response.json()["current_day_number"] == 2

        response = client.post(
            "/user-progress/reset", json={"user_id": member_id}, headers=owner_headers
        )
        assert response.json()["current_day_number"] == 1

    def test_progress_for_unknown_user(self, client):
        response = client.get("/user-progress", params={"user_id": 999})
        assert response.status_code == 404

    def test_reorder(self, client, owner_headers, member_id, plan):
        entries = client.get(
            "/workout-sequence", params={"user_id": member_id, "day_number": 1}
        ).json()
        reversed_ids = [e["id"] for e in reversed(entries)]

        response = client.post(
            "/workout-sequence/reorder",
            json={"user_id": member_id, "day_number": 1, "entry_ids": reversed_ids},
            headers=owner_headers,
        )
        assert [e["id"] for e in response.json()] == reversed_ids

        response = client.post(
            "/workout-sequence/reorder",
            json={"user_id": member_id, "day_number": 1, "entry_ids": reversed_ids[:1]},
            headers=owner_headers,
        )
        assert response.status_code == 400

    def test_remove_entry(self, client, owner_headers, member_id, plan):
        days = client.get("/workout-sequence/days", params={"user_id": member_id}).json()
        assert days["max_day"] == 2
        entry_id = days["days"][1]["entries"][0]["id"]

        response = client.delete(
            "/workout-sequence", params={"id": entry_id}, headers=owner_headers
        )
        assert response.status_code == 200

        days = client.get("/workout-sequence/days", params={"user_id": member_id}).json()
        assert days["max_day"] == 1


class TestAttendanceAndLogs:

    def test_check_in_out(self, client, member_id, plan):
        assert client.get("/check-ins/open", params={"user_id": member_id}).json() is None

        first = client.post("/check-ins", json={"user_id": member_id}).json()
        second = client.post("/check-ins", json={"user_id": member_id}).json()
        assert first["id"] == second["id"]

        response = client.post("/check-ins/check-out", json={"user_id": member_id})
        body = response.json()
        assert body["check_in"]["duration_minutes"] == 0
        assert body["check_in"]["duration"] == "0m"
        assert body["advanced"] is True
        assert body["progress"]["current_day_number"] == 2

        response = client.post("/check-ins/check-out", json={"user_id": member_id})
        assert response.status_code == 400

    def test_workout_log_crud(self, client, member_id, plan):
        response = client.post("/workout-logs", json={
            "user_id": member_id,
            "exercise_id": plan["Squat"],
            "actual_sets": 3,
            "actual_reps": 8,
            "weight": 60,
            "sets_data": [{"set_number": 1, "actual_weight": 60, "actual_reps": 8, "completed": True}],
        })
        assert response.status_code == 200
        log = response.json()
        assert log["sets_data"][0]["completed"] is True

        response = client.put("/workout-logs", json={"id": log["id"], "actual_reps": 10})
        assert response.json()["actual_reps"] == 10

        logs = client.get("/workout-logs", params={"user_id": member_id}).json()
        assert [entry["id"] for entry in logs] == [log["id"]]

        response = client.delete("/workout-logs", params={"id": log["id"]})
        assert response.status_code == 200
        assert client.get("/workout-logs", params={"user_id": member_id}).json() == []

    def test_workout_log_rejects_non_numeric(self, client, member_id, plan):
        response = client.post("/workout-logs", json={
            "user_id": member_id,
            "exercise_id": plan["Squat"],
            "actual_sets": "many",
            "actual_reps": 8,
        })
        assert response.status_code == 400

    def test_workout_log_rejects_negative_weight(self, client, member_id, plan):
        response = client.post("/workout-logs", json={
            "user_id": member_id,
            "exercise_id": plan["Squat"],
            "actual_sets": 3,
            "actual_reps": 8,
            "weight": -5,
        })
        assert response.status_code == 400
        assert client.get("/workout-logs", params={"user_id": member_id}).json() == []

    def test_analytics(self, client, owner_headers, member_id, plan):
        client.post("/workout-logs", json={
            "user_id": member_id,
            "exercise_id": plan["Squat"],
            "actual_sets": 3,
            "actual_reps": 8,
            "weight": 60,
        })
        client.post("/check-ins", json={"user_id": member_id})

        progress = client.get("/analytics", params={"user_id": member_id}).json()
        assert progress["leg"]["total_workouts"] == 1

        leg = client.get("/analytics", params={"user_id": member_id, "category": "leg"}).json()
        assert leg["avg_volume_end"] == 1440

        summary = client.get("/analytics/summary", params={"user_id": member_id}).json()
        assert summary["total_reps"] == 24
        assert summary["streak"] == 1

        heatmap = client.get("/analytics/heatmap", params={"user_id": member_id}).json()
        assert heatmap[-1][-1]["level"] == 4

        chart = client.get(
            "/analytics/chart", params={"user_id": member_id, "period": "month"}
        ).json()
        assert len(chart) == 30
        assert chart[-1]["actual"] == 24

        assert client.get("/analytics/gym").status_code == 401
        gym = client.get("/analytics/gym", headers=owner_headers).json()
        assert gym["total_users"] == 1
        assert gym["today_check_ins"] == 1
