"""Daily analytics service."""

import logging
from datetime import date

from ..db.repositories import AnalyticsRepository
from ..exceptions import NotFoundError
from ..models.analytics import AnalyticsMetrics, DailyAnalytics, compute_metrics

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Save, query and update per-day completion tracking."""

    def __init__(self, repository: AnalyticsRepository | None = None):
        self.repository = repository or AnalyticsRepository()

    async def save_day(self, analytics: DailyAnalytics) -> DailyAnalytics:
        """Upsert a user's record for one day.

        completed_tasks and productivity_score are recomputed from the
        completions before writing.
        """
        analytics.recalculate()
        saved = await self.repository.upsert(analytics)
        logger.info(
            "Saved analytics for user=%s date=%s score=%d",
            saved.user_id,
            saved.date,
            saved.productivity_score,
        )
        return saved

    async def query(
        self,
        user_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
        today: date | None = None,
    ) -> tuple[list[DailyAnalytics], AnalyticsMetrics]:
        """Fetch records in range (newest first) with aggregate metrics."""
        records = await self.repository.list_by_user(user_id, start_date, end_date)
        return records, compute_metrics(records, today=today)

    async def update_task_completion(
        self, user_id: str, date: str, task_id: str, completed: bool
    ) -> DailyAnalytics:
        """Toggle one task's completion and persist recomputed metrics.

        An unknown task_id leaves the record's counters as they were.

        Raises:
            NotFoundError: if the user has no record for that date
        """
        analytics = await self.repository.get(user_id, date)
        if analytics is None:
            raise NotFoundError("Analytics not found for this date")

        if not analytics.set_task_completed(task_id, completed):
            logger.info("Task %s not tracked for user=%s date=%s", task_id, user_id, date)

        return await self.repository.update(analytics)

    async def reset(self, user_id: str) -> int:
        """Delete all of a user's records."""
        deleted = await self.repository.delete_by_user(user_id)
        logger.info("Reset analytics for user=%s (%d records)", user_id, deleted)
        return deleted
