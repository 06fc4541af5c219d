"""Timetable generation orchestration."""

import logging
from dataclasses import dataclass

from ..exceptions import CompletionError
from ..models.preferences import UserPreferences
from ..models.task import Task
from ..models.technique import SessionConfig, Technique
from .client import CompletionClient, OpenAICompletionClient
from .parser import parse_timetable_response
from .prompts import build_ceo_prompt, build_timetable_prompt

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Result from a generation call."""

    timetable: dict
    raw_response: str


class TimetableGenerator:
    """Builds a prompt, calls the completion service and parses the reply."""

    def __init__(self, client: CompletionClient | None = None):
        self.client = client or OpenAICompletionClient()

    async def _complete(self, prompt: str) -> str:
        try:
            return await self.client.complete(prompt)
        except Exception as e:
            logger.error("Completion request failed: %s", e, exc_info=True)
            raise CompletionError("Completion service request failed", details=str(e)) from e

    async def generate(
        self,
        tasks: list[Task],
        technique: Technique,
        session_config: SessionConfig,
        preferences: UserPreferences | None = None,
    ) -> GenerationResult:
        """Generate a timetable for a task list.

        Raises:
            CompletionError: if the completion service call fails
        """
        prompt = build_timetable_prompt(tasks, technique, session_config, preferences)
        text = await self._complete(prompt)
        return GenerationResult(timetable=parse_timetable_response(text), raw_response=text)

    async def generate_ceo(
        self,
        random_plan: str,
        preferences: UserPreferences | None = None,
    ) -> GenerationResult:
        """Generate an executive-style timetable from a free-text brain dump.

        Raises:
            CompletionError: if the completion service call fails
        """
        prompt = build_ceo_prompt(random_plan, preferences)
        text = await self._complete(prompt)
        return GenerationResult(timetable=parse_timetable_response(text), raw_response=text)
