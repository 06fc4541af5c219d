"""Tests for the HTTP API."""

import pytest

from samay_sahayak.exceptions import DatabaseUnavailableError, StorageError


def _analytics_body(user_id: str, day: str, completed: int = 2, total: int = 3) -> dict:
    return {
        "userId": user_id,
        "date": day,
        "technique": "Pomodoro",
        "energyLevel": "high",
        "goal": "Ship it",
        "totalTasks": total,
        "totalWorkTime": 100,
        "totalBreakTime": 20,
        "taskCompletions": [
            {"taskId": f"task-{i}", "taskTitle": f"Task {i}", "completed": i < completed}
            for i in range(total)
        ],
    }


def _generation_body(sample_tasks, sample_session_config) -> dict:
    return {
        "tasks": [t.to_dict() for t in sample_tasks],
        "technique": {"name": "Pomodoro Technique", "description": "25/5"},
        "sessionConfig": sample_session_config.to_dict(),
        "userPreferences": {"dailyGoal": "Ship the report", "energyLevel": "high"},
    }


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["message"]
        assert body["database"]["state"] == "connected"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    def test_cors_allowlist(self, client):
        allowed = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
        assert allowed.headers["access-control-allow-origin"] == "http://localhost:3000"

        blocked = client.get("/api/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in blocked.headers


class TestGeneration:
    """Tests for the generation endpoints."""

    def test_generate_timetable(self, client, fake_completion, sample_tasks, sample_session_config, sample_timetable):
        response = client.post(
            "/api/generate-timetable", json=_generation_body(sample_tasks, sample_session_config)
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["timetable"] == sample_timetable
        assert body["rawResponse"] == fake_completion.response
        assert "Main Goal: Ship the report" in fake_completion.prompts[0]

    def test_no_tasks(self, client, sample_session_config):
        response = client.post(
            "/api/generate-timetable",
            json={"tasks": [], "technique": {"name": "Pomodoro"}, "sessionConfig": sample_session_config.to_dict()},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "No tasks provided", "details": None}

    def test_missing_technique(self, client, sample_tasks):
        response = client.post(
            "/api/generate-timetable", json={"tasks": [t.to_dict() for t in sample_tasks]}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Technique and session configuration required"

    def test_null_technique_name_is_not_a_server_error(self, client, fake_completion, sample_tasks, sample_session_config):
        body = _generation_body(sample_tasks, sample_session_config)
        body["technique"] = {"id": None, "name": None}
        response = client.post("/api/generate-timetable", json=body)

        assert response.status_code == 200
        assert "TECHNIQUE: Custom" in fake_completion.prompts[0]

    def test_invalid_task(self, client, sample_session_config):
        response = client.post(
            "/api/generate-timetable",
            json={
                "tasks": [{"title": "No duration"}],
                "technique": "pomodoro",
                "sessionConfig": sample_session_config.to_dict(),
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid task data"

    def test_completion_failure(self, client, fake_completion, sample_tasks, sample_session_config):
        fake_completion.error = RuntimeError("upstream timeout")
        response = client.post(
            "/api/generate-timetable", json=_generation_body(sample_tasks, sample_session_config)
        )
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to generate timetable",
            "details": "upstream timeout",
        }

    def test_unparseable_completion_still_succeeds(self, client, fake_completion, sample_tasks, sample_session_config):
        fake_completion.response = "no schedule today"
        response = client.post(
            "/api/generate-timetable", json=_generation_body(sample_tasks, sample_session_config)
        )
        assert response.status_code == 200
        assert response.json()["timetable"]["dailySchedule"] == []

    def test_generate_ceo_timetable(self, client, fake_completion):
        response = client.post(
            "/api/generate-ceo-timetable",
            json={"randomPlan": "deck, gym, investor call", "userPreferences": {"energyLevel": "low"}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "rawResponse" not in body
        assert "deck, gym, investor call" in fake_completion.prompts[0]

    def test_ceo_requires_plan(self, client):
        response = client.post("/api/generate-ceo-timetable", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "No plan provided"

    def test_ceo_completion_failure(self, client, fake_completion):
        fake_completion.error = RuntimeError("bad key")
        response = client.post("/api/generate-ceo-timetable", json={"randomPlan": "inbox"})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate CEO timetable"

    def test_generate_local_timetable(self, client, fake_completion, sample_tasks, sample_session_config):
        body = _generation_body(sample_tasks, sample_session_config)
        body["date"] = "2024-01-01"
        response = client.post("/api/generate-local-timetable", json=body)

        assert response.status_code == 200
        timetable = response.json()["timetable"]
        assert timetable["technique"] == "Pomodoro Technique"
        assert timetable["date"] == "2024-01-01"
        assert [i["activity"] for i in timetable["dailySchedule"] if i["type"] == "work"] == [
            "Write report",
            "Answer email",
            "Read chapter",
        ]
        assert fake_completion.prompts == []

    def test_invalid_json_body(self, client):
        response = client.post(
            "/api/generate-timetable",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestTimetables:
    """Tests for saved timetable endpoints."""

    def test_save_and_list(self, client, sample_timetable):
        response = client.post("/api/timetables", json={"userId": "u1", "timetable": sample_timetable})
        assert response.status_code == 200
        saved = response.json()["timetable"]
        assert saved["userId"] == "u1"
        assert saved["_id"]

        response = client.get("/api/timetables", params={"userId": "u1"})
        assert response.status_code == 200
        timetables = response.json()["timetables"]
        assert len(timetables) == 1
        assert timetables[0]["data"] == sample_timetable

    def test_save_keeps_ceo_shaped_blob_as_sent(self, client):
        ceo_timetable = {
            "dailyBriefing": "Protect the morning for deep work.",
            "dailySchedule": [
                {
                    "time": "09:00 - 11:00",
                    "activity": "Deep Work",
                    "type": "work",
                    "description": "Two hours",
                    "endTime": "11:00",
                },
                {"time": "11:00 - 11:15", "activity": "Walk", "type": "health", "priority": None},
            ],
            "recommendations": ["Hydrate"],
        }
        saved = client.post(
            "/api/timetables", json={"userId": "u1", "timetable": ceo_timetable}
        ).json()["timetable"]
        assert saved["data"] == ceo_timetable

        fetched = client.get(f"/api/timetables/{saved['_id']}").json()["timetable"]
        assert fetched["data"] == ceo_timetable

        listed = client.get("/api/timetables", params={"userId": "u1"}).json()["timetables"]
        assert listed[0]["data"] == ceo_timetable

    def test_list_newest_first(self, client, sample_timetable):
        ids = []
        for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
            response = client.post(
                "/api/timetables", json={"userId": "u1", "timetable": dict(sample_timetable, date=day)}
            )
            ids.append(response.json()["timetable"]["_id"])

        listed = client.get("/api/timetables", params={"userId": "u1"}).json()["timetables"]
        assert [t["_id"] for t in listed] == list(reversed(ids))

    def test_list_other_user_empty(self, client, sample_timetable):
        client.post("/api/timetables", json={"userId": "u1", "timetable": sample_timetable})
        response = client.get("/api/timetables", params={"userId": "someone-else"})
        assert response.json() == {"success": True, "timetables": []}

    def test_save_requires_fields(self, client, sample_timetable):
        response = client.post("/api/timetables", json={"timetable": sample_timetable})
        assert response.status_code == 400
        assert response.json()["error"] == "userId and timetable are required"

    def test_save_rejects_malformed_timetable(self, client):
        response = client.post(
            "/api/timetables", json={"userId": "u1", "timetable": {"dailySchedule": "09:00 work"}}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid timetable data"
        assert "dailySchedule must be a list" in body["details"]

    def test_list_requires_user(self, client):
        response = client.get("/api/timetables")
        assert response.status_code == 400
        assert response.json()["error"] == "userId is required"

    def test_get_and_delete(self, client, sample_timetable):
        saved = client.post(
            "/api/timetables", json={"userId": "u1", "timetable": sample_timetable}
        ).json()["timetable"]

        response = client.get(f"/api/timetables/{saved['_id']}")
        assert response.status_code == 200
        assert response.json()["timetable"]["data"] == sample_timetable

        response = client.delete(f"/api/timetables/{saved['_id']}")
        assert response.json() == {"success": True}

        response = client.get(f"/api/timetables/{saved['_id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "Timetable not found"

    def test_delete_missing_succeeds(self, client):
        response = client.delete("/api/timetables/does-not-exist")
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_list_when_database_unavailable(self, client, app, monkeypatch):
        async def unavailable(*args, **kwargs):
            raise DatabaseUnavailableError("Database connection failed")

        monkeypatch.setattr(app.state.db_manager, "ensure_connected", unavailable)
        response = client.get("/api/timetables", params={"userId": "u1"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Database connection error")
        assert response.json()["details"] == "Database is not connected"

    @pytest.mark.parametrize(
        "category, status, message",
        [
            (StorageError.CONNECTION, 500, "Database connection failed"),
            (StorageError.VALIDATION, 400, "Invalid request data"),
            (StorageError.UNKNOWN, 500, "Failed to fetch timetables"),
        ],
    )
    def test_list_error_categories(self, client, app, monkeypatch, category, status, message):
        async def failing(user_id):
            raise StorageError("Failed to fetch timetables", details="boom", category=category)

        monkeypatch.setattr(app.state.timetable_repo, "list_by_user", failing)
        response = client.get("/api/timetables", params={"userId": "u1"})

        assert response.status_code == status
        assert response.json()["error"] == message
        assert response.json()["success"] is False


class TestAnalytics:
    """Tests for analytics endpoints."""

    def test_save_derives_score(self, client):
        response = client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01"))
        assert response.status_code == 200
        analytics = response.json()["analytics"]
        assert analytics["completedTasks"] == 2
        assert analytics["productivityScore"] == 67

    def test_save_requires_user_and_date(self, client):
        response = client.post("/api/analytics", json={"userId": "u1"})
        assert response.status_code == 400
        assert response.json()["error"] == "userId and date are required"

    def test_upsert_same_day(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=1))
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=3))

        body = client.get("/api/analytics", params={"userId": "u1"}).json()
        assert len(body["analytics"]) == 1
        assert body["analytics"][0]["completedTasks"] == 3
        assert body["analytics"][0]["productivityScore"] == 100

    def test_partial_upsert_keeps_unsent_fields(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=1))

        response = client.post(
            "/api/analytics",
            json={
                "userId": "u1",
                "date": "2024-01-01",
                "notes": "felt good",
                "taskCompletions": [
                    {"taskId": "task-0", "taskTitle": "Task 0", "completed": True},
                    {"taskId": "task-1", "taskTitle": "Task 1", "completed": True},
                ],
            },
        )
        analytics = response.json()["analytics"]
        assert analytics["notes"] == "felt good"
        assert analytics["technique"] == "Pomodoro"
        assert analytics["goal"] == "Ship it"
        assert analytics["energyLevel"] == "high"
        assert analytics["totalWorkTime"] == 100
        assert analytics["totalBreakTime"] == 20
        assert analytics["totalTasks"] == 2
        assert analytics["completedTasks"] == 2
        assert analytics["productivityScore"] == 100

    def test_notes_only_upsert_keeps_completions(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=2, total=3))

        response = client.post(
            "/api/analytics", json={"userId": "u1", "date": "2024-01-01", "notes": "tired"}
        )
        analytics = response.json()["analytics"]
        assert analytics["totalTasks"] == 3
        assert analytics["completedTasks"] == 2
        assert analytics["productivityScore"] == 67
        assert len(analytics["taskCompletions"]) == 3

    def test_save_rejects_non_boolean_completion(self, client):
        body = _analytics_body("u1", "2024-01-01")
        body["taskCompletions"][0]["completed"] = "false"
        response = client.post("/api/analytics", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid analytics data"

    def test_query_with_metrics(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=1, total=2))
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-02", completed=2, total=2))
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-05", completed=0, total=2))

        body = client.get(
            "/api/analytics",
            params={"userId": "u1", "startDate": "2024-01-01", "endDate": "2024-01-02"},
        ).json()

        assert body["success"] is True
        assert [r["date"] for r in body["analytics"]] == ["2024-01-02", "2024-01-01"]
        metrics = body["metrics"]
        assert metrics["totalDays"] == 2
        assert metrics["totalTasksCompleted"] == 3
        assert metrics["totalWorkTime"] == 200
        assert metrics["averageProductivityScore"] == 75
        assert metrics["mostUsedTechnique"] == "Pomodoro"
        assert metrics["averageTasksPerDay"] == 2
        assert metrics["averageWorkTimePerDay"] == 100
        assert "currentStreak" in metrics

    def test_query_empty(self, client):
        body = client.get("/api/analytics", params={"userId": "nobody"}).json()
        assert body["analytics"] == []
        assert body["metrics"]["totalDays"] == 0
        assert body["metrics"]["mostUsedTechnique"] == "None"

    def test_query_requires_user(self, client):
        assert client.get("/api/analytics").status_code == 400

    def test_update_task_completion(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=1, total=2))

        response = client.put(
            "/api/analytics/task",
            json={"userId": "u1", "date": "2024-01-01", "taskId": "task-1", "completed": True},
        )
        assert response.status_code == 200
        analytics = response.json()["analytics"]
        assert analytics["completedTasks"] == 2
        assert analytics["productivityScore"] == 100
        assert analytics["taskCompletions"][1]["completedAt"] is not None

        response = client.put(
            "/api/analytics/task",
            json={"userId": "u1", "date": "2024-01-01", "taskId": "task-1", "completed": False},
        )
        analytics = response.json()["analytics"]
        assert analytics["completedTasks"] == 1
        assert analytics["taskCompletions"][1]["completedAt"] is None

    def test_update_unknown_task_leaves_counters(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=2, total=3))

        response = client.put(
            "/api/analytics/task",
            json={"userId": "u1", "date": "2024-01-01", "taskId": "task-42", "completed": True},
        )
        assert response.status_code == 200
        analytics = response.json()["analytics"]
        assert analytics["completedTasks"] == 2
        assert analytics["productivityScore"] == 67

    def test_update_missing_day(self, client):
        response = client.put(
            "/api/analytics/task",
            json={"userId": "u1", "date": "2030-01-01", "taskId": "task-0", "completed": True},
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Analytics not found for this date"

    def test_update_rejects_string_completed(self, client):
        client.post("/api/analytics", json=_analytics_body("u1", "2024-01-01", completed=0, total=2))

        response = client.put(
            "/api/analytics/task",
            json={"userId": "u1", "date": "2024-01-01", "taskId": "task-0", "completed": "false"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "completed must be a boolean"

        stored = client.get("/api/analytics", params={"userId": "u1"}).json()["analytics"][0]
        assert stored["completedTasks"] == 0

    def test_update_requires_fields(self, client):
        response = client.put("/api/analytics/task", json={"userId": "u1", "date": "2024-01-01"})
        assert response.status_code == 400
        assert response.json()["error"] == "userId, date, and taskId are required"

    def test_reset(self, client):
        for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
            client.post("/api/analytics", json=_analytics_body("u2", day))
        client.post("/api/analytics", json=_analytics_body("u3", "2024-01-01"))

        response = client.delete("/api/analytics", params={"userId": "u2"})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Deleted 3 analytics records",
            "deletedCount": 3,
        }

        assert client.get("/api/analytics", params={"userId": "u2"}).json()["analytics"] == []
        assert len(client.get("/api/analytics", params={"userId": "u3"}).json()["analytics"]) == 1

    def test_reset_requires_user(self, client):
        assert client.delete("/api/analytics").status_code == 400


class TestCatalog:
    def test_techniques(self, client):
        techniques = client.get("/api/techniques").json()["techniques"]
        assert techniques[0]["id"] == "pomodoro"
        assert techniques[0]["defaultSessionLength"] == 25

    def test_templates(self, client):
        templates = client.get("/api/templates").json()["templates"]
        assert {t["id"] for t in templates} == {"morning-person", "night-owl", "balanced-day"}
