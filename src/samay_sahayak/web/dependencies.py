"""Request helpers shared by the API routers."""

import json

from fastapi import Request

from ..agents.generator import TimetableGenerator
from ..db.engine import DatabaseManager
from ..db.repositories import TimetableRepository
from ..exceptions import RequestValidationError
from ..models.preferences import UserPreferences
from ..models.task import Task
from ..models.technique import (
    SessionConfig,
    Technique,
    find_technique_by_name,
    get_technique,
)
from ..services.analytics import AnalyticsService


def get_db_manager(request: Request) -> DatabaseManager:
    """Get the connection manager from app state."""
    return request.app.state.db_manager


def get_generator(request: Request) -> TimetableGenerator:
    """Get the timetable generator from app state."""
    return request.app.state.generator


def get_timetable_repository(request: Request) -> TimetableRepository:
    """Get the timetable repository from app state."""
    return request.app.state.timetable_repo


def get_analytics_service(request: Request) -> AnalyticsService:
    """Get the analytics service from app state."""
    return request.app.state.analytics_service


async def read_json(request: Request) -> dict:
    """Read the request body as a JSON object; an empty body reads as {}."""
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise RequestValidationError("Request body must be valid JSON", details=str(e)) from e
    if not isinstance(payload, dict):
        raise RequestValidationError("Request body must be a JSON object")
    return payload


def parse_tasks(raw_tasks) -> list[Task]:
    """Build tasks from the request's task list."""
    if not isinstance(raw_tasks, list):
        raise RequestValidationError("tasks must be a list", field="tasks")
    try:
        return [Task.from_dict(item) for item in raw_tasks]
    except (KeyError, TypeError, ValueError) as e:
        raise RequestValidationError("Invalid task data", field="tasks", details=str(e)) from e


def parse_technique(raw) -> Technique:
    """Accept a technique object, a catalog id or a display name."""
    if isinstance(raw, str):
        return get_technique(raw) or find_technique_by_name(raw) or Technique.from_dict({"name": raw})
    if not isinstance(raw, dict):
        raise RequestValidationError("Invalid technique", field="technique")
    try:
        return Technique.from_dict(raw)
    except (TypeError, ValueError) as e:
        raise RequestValidationError("Invalid technique", field="technique", details=str(e)) from e


def parse_session_config(raw) -> SessionConfig:
    if not isinstance(raw, dict):
        raise RequestValidationError("Invalid session configuration", field="sessionConfig")
    try:
        return SessionConfig.from_dict(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise RequestValidationError(
            "Invalid session configuration", field="sessionConfig", details=str(e)
        ) from e


def parse_preferences(raw) -> UserPreferences:
    if raw is not None and not isinstance(raw, dict):
        raise RequestValidationError("Invalid user preferences", field="userPreferences")
    return UserPreferences.from_dict(raw)
