"""AI-backed timetable generation."""

from .client import CompletionClient, OpenAICompletionClient
from .generator import GenerationResult, TimetableGenerator
from .parser import parse_timetable_response
from .prompts import build_ceo_prompt, build_timetable_prompt

__all__ = [
    "build_ceo_prompt",
    "build_timetable_prompt",
    "CompletionClient",
    "GenerationResult",
    "OpenAICompletionClient",
    "parse_timetable_response",
    "TimetableGenerator",
]
