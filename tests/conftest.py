"""Pytest configuration and fixtures."""

import copy
import json
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from samay_sahayak.agents.generator import TimetableGenerator
from samay_sahayak.db.engine import DatabaseManager
from samay_sahayak.models.preferences import EnergyLevel, UserPreferences
from samay_sahayak.models.task import Priority, Task
from samay_sahayak.models.technique import SessionConfig, get_technique
from samay_sahayak.web.app import create_app

SAMPLE_TIMETABLE = {
    "date": "2024-01-01",
    "dailySchedule": [
        {
            "time": "09:00",
            "duration": 25,
            "activity": "Write report",
            "type": "work",
            "description": "Draft the quarterly summary",
            "priority": "high",
            "category": "Work",
        },
        {
            "time": "09:25",
            "duration": 5,
            "activity": "Break",
            "type": "break",
            "description": "Stretch",
        },
        {
            "time": "09:30",
            "duration": 25,
            "activity": "Answer email",
            "type": "work",
            "description": "Inbox zero",
            "priority": "medium",
            "category": "Work",
        },
    ],
    "technique": "Pomodoro",
    "totalWorkTime": 100,
    "totalBreakTime": 20,
    "recommendations": ["Start with the report"],
}


class FakeCompletionClient:
    """Completion client that records prompts and returns a canned reply."""

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def sample_tasks():
    """Three tasks in deliberately unsorted priority order."""
    return [
        Task(title="Read chapter", estimated_duration=30, priority=Priority.LOW, category="Learning"),
        Task(title="Write report", estimated_duration=60, priority=Priority.HIGH, category="Work"),
        Task(title="Answer email", estimated_duration=20, priority=Priority.MEDIUM, category="Work"),
    ]


@pytest.fixture
def sample_session_config():
    """Pomodoro defaults: 25 minute sessions, 5 minute breaks, 09:00-17:00."""
    return SessionConfig.for_technique(get_technique("pomodoro"))


@pytest.fixture
def sample_preferences():
    return UserPreferences(daily_goal="Ship the report", energy_level=EnergyLevel.HIGH)


@pytest.fixture
def sample_timetable():
    """A three-item Pomodoro timetable in wire format."""
    return copy.deepcopy(SAMPLE_TIMETABLE)


@pytest.fixture
def fake_completion():
    """Completion client answering with a fenced copy of SAMPLE_TIMETABLE."""
    return FakeCompletionClient(
        response="Here is your plan:\n```json\n" + json.dumps(SAMPLE_TIMETABLE) + "\n```\nGood luck!"
    )


@pytest.fixture
def app(temp_db_path, fake_completion):
    """App wired to a temporary database and the fake completion client."""
    return create_app(
        generator=TimetableGenerator(fake_completion),
        db_manager=DatabaseManager(temp_db_path, max_retries=1, retry_delay=0),
        api_prefix="/api",
    )


@pytest.fixture
def client(app):
    """Test client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
