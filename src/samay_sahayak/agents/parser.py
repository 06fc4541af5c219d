"""Extraction of timetable JSON from free-text completions."""

import json
import logging
import re

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")

NO_JSON_MESSAGE = "Please review the AI response manually"
PARSE_ERROR_MESSAGE = "Error parsing AI response"


def default_timetable(raw_response: str, recommendation: str) -> dict:
    """Empty timetable returned when a completion can't be parsed."""
    return {
        "dailySchedule": [],
        "technique": "Custom",
        "totalWorkTime": 0,
        "totalBreakTime": 0,
        "recommendations": [recommendation],
        "rawResponse": raw_response,
    }


def extract_json_text(text: str) -> str | None:
    """Locate the JSON object in a completion.

    A fenced ```json block wins; otherwise the span from the first ``{`` to
    the last ``}`` is used.
    """
    match = FENCED_JSON.search(text)
    if match:
        return match.group(1)
    match = GREEDY_OBJECT.search(text)
    if match:
        return match.group(0)
    return None


def parse_timetable_response(text) -> dict:
    """Parse a completion into a timetable dict.

    Never raises: a missing or malformed object degrades to the default
    structure with the raw text attached.
    """
    if not isinstance(text, str):
        text = "" if text is None else str(text)

    json_text = extract_json_text(text)
    if json_text is None:
        logger.warning("No JSON object found in completion (%d chars)", len(text))
        return default_timetable(text, NO_JSON_MESSAGE)

    try:
        parsed = json.loads(json_text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Failed to parse completion JSON: %s", e)
        return default_timetable(text, PARSE_ERROR_MESSAGE)

    if not isinstance(parsed, dict):
        logger.warning("Completion JSON is a %s, not an object", type(parsed).__name__)
        return default_timetable(text, PARSE_ERROR_MESSAGE)

    return parsed
