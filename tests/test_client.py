"""Tests for the API client against the in-process app."""

import httpx
import pytest

from samay_sahayak.client import PlannerApiClient
from samay_sahayak.exceptions import ApiError


@pytest.fixture
async def api(app):
    """Client routed straight into the ASGI app."""
    async with PlannerApiClient(
        base_url="http://test", api_prefix="/api", transport=httpx.ASGITransport(app=app)
    ) as client:
        yield client


def _failing_client(error: Exception) -> PlannerApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    return PlannerApiClient(
        base_url="http://test", api_prefix="/api", transport=httpx.MockTransport(handler)
    )


async def test_generate_timetable(api, sample_tasks, sample_session_config, sample_timetable):
    result = await api.generate_timetable(
        [t.to_dict() for t in sample_tasks],
        {"name": "Pomodoro Technique", "description": ""},
        sample_session_config.to_dict(),
        {"dailyGoal": "Ship it"},
    )
    assert result["success"] is True
    assert result["timetable"] == sample_timetable


async def test_save_fetch_delete(api, sample_timetable):
    saved = await api.save_timetable("u1", sample_timetable)
    timetable_id = saved["timetable"]["_id"]

    listed = await api.fetch_timetables("u1")
    assert [t["_id"] for t in listed["timetables"]] == [timetable_id]

    fetched = await api.get_timetable(timetable_id)
    assert fetched["timetable"]["data"]["technique"] == "Pomodoro"

    assert await api.delete_timetable(timetable_id) == {"success": True}

    with pytest.raises(ApiError) as exc_info:
        await api.get_timetable(timetable_id)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Timetable not found"


async def test_error_envelope_becomes_api_error(api):
    with pytest.raises(ApiError) as exc_info:
        await api.save_timetable("", {})
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "userId and timetable are required"


async def test_analytics_flow(api):
    await api.save_analytics({
        "userId": "u1",
        "date": "2024-01-01",
        "technique": "Pomodoro",
        "taskCompletions": [
            {"taskId": "task-0", "taskTitle": "A", "completed": False},
            {"taskId": "task-1", "taskTitle": "B", "completed": False},
        ],
    })

    updated = await api.update_task_completion("u1", "2024-01-01", "task-0", True)
    assert updated["analytics"]["productivityScore"] == 50

    result = await api.fetch_analytics("u1", start_date="2024-01-01")
    assert result["metrics"]["totalTasksCompleted"] == 1

    reset = await api.reset_analytics("u1")
    assert reset["deletedCount"] == 1


async def test_health(api):
    result = await api.health()
    assert result["status"] == "OK"


async def test_timeout_maps_to_504():
    async with _failing_client(httpx.ReadTimeout("too slow")) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.health()
    assert exc_info.value.status_code == 504


async def test_network_error_maps_to_503():
    async with _failing_client(httpx.ConnectError("refused")) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.fetch_timetables("u1")
    assert exc_info.value.status_code == 503
    assert "backend is running" in exc_info.value.message
