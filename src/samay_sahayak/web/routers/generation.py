"""Timetable generation routes."""

import logging

from fastapi import APIRouter, Request

from ...exceptions import CompletionError, RequestValidationError
from ...generators.local_scheduler import generate_local_timetable
from ..dependencies import (
    get_generator,
    parse_preferences,
    parse_session_config,
    parse_tasks,
    parse_technique,
    read_json,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])


@router.post("/generate-timetable")
async def generate_timetable(request: Request):
    """Generate a timetable for a task list with the completion service."""
    payload = await read_json(request)

    if not payload.get("tasks"):
        raise RequestValidationError("No tasks provided", field="tasks")
    if not payload.get("technique") or not payload.get("sessionConfig"):
        raise RequestValidationError("Technique and session configuration required")

    tasks = parse_tasks(payload["tasks"])
    technique = parse_technique(payload["technique"])
    session_config = parse_session_config(payload["sessionConfig"])
    preferences = parse_preferences(payload.get("userPreferences"))

    logger.info("Generating timetable for %d tasks using %s", len(tasks), technique.name)
    try:
        result = await get_generator(request).generate(
            tasks, technique, session_config, preferences
        )
    except CompletionError as e:
        raise CompletionError("Failed to generate timetable", details=e.details) from e

    return {
        "success": True,
        "timetable": result.timetable,
        "rawResponse": result.raw_response,
    }


@router.post("/generate-ceo-timetable")
async def generate_ceo_timetable(request: Request):
    """Generate an executive-style timetable from a free-text plan."""
    payload = await read_json(request)

    random_plan = payload.get("randomPlan")
    if not random_plan:
        raise RequestValidationError("No plan provided", field="randomPlan")
    preferences = parse_preferences(payload.get("userPreferences"))

    logger.info("Generating CEO timetable (%d chars of plan)", len(str(random_plan)))
    try:
        result = await get_generator(request).generate_ceo(str(random_plan), preferences)
    except CompletionError as e:
        raise CompletionError("Failed to generate CEO timetable", details=e.details) from e

    return {"success": True, "timetable": result.timetable}


@router.post("/generate-local-timetable")
async def generate_local(request: Request):
    """Generate a timetable locally, without the completion service."""
    payload = await read_json(request)

    if not payload.get("tasks"):
        raise RequestValidationError("No tasks provided", field="tasks")
    if not payload.get("sessionConfig"):
        raise RequestValidationError("Session configuration required", field="sessionConfig")

    tasks = parse_tasks(payload["tasks"])
    session_config = parse_session_config(payload["sessionConfig"])
    preferences = parse_preferences(payload.get("userPreferences"))
    technique_name = (
        parse_technique(payload["technique"]).name if payload.get("technique") else "Custom"
    )

    timetable = generate_local_timetable(
        tasks,
        technique_name,
        session_config,
        preferences,
        date=str(payload.get("date") or ""),
    )
    return {"success": True, "timetable": timetable.to_dict()}
