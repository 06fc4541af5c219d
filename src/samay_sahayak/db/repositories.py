"""Data access layer for samay-sahayak."""

import json
import logging
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..exceptions import StorageError
from ..models.analytics import DailyAnalytics, TaskCompletion
from ..models.timetable import SavedTimetable, TimetableData
from .engine import get_db_path

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def storage_errors(operation: str):
    """Wrap aiosqlite failures in StorageError with a category hint."""

    def decorator(f):
        @wraps(f)
        async def wrapper(*args, **kwargs):
            try:
                return await f(*args, **kwargs)
            except aiosqlite.OperationalError as e:
                raise StorageError(
                    f"Failed to {operation}", details=str(e), category=StorageError.CONNECTION
                ) from e
            except aiosqlite.IntegrityError as e:
                raise StorageError(
                    f"Failed to {operation}", details=str(e), category=StorageError.VALIDATION
                ) from e
            except aiosqlite.Error as e:
                raise StorageError(f"Failed to {operation}", details=str(e)) from e

        return wrapper

    return decorator


class TimetableRepository:
    """Repository for saved timetables."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @storage_errors("save timetable")
    async def create(self, user_id: str, data: TimetableData) -> SavedTimetable:
        """Insert a new saved timetable."""
        now = _now()
        saved = SavedTimetable(
            id=_new_id(),
            user_id=user_id,
            data=data,
            created_at=now,
            updated_at=now,
        )
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO timetables (id, user_id, data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    saved.id,
                    saved.user_id,
                    json.dumps(data.to_dict()),
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            await db.commit()
        return saved

    @storage_errors("fetch timetable")
    async def get(self, timetable_id: str) -> SavedTimetable | None:
        """Get a saved timetable by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM timetables WHERE id = ?", (timetable_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_timetable(row)

    @storage_errors("fetch timetables")
    async def list_by_user(self, user_id: str) -> list[SavedTimetable]:
        """List a user's timetables, most recent first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM timetables
                WHERE user_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_timetable(row) for row in rows]

    @storage_errors("delete timetable")
    async def delete(self, timetable_id: str) -> int:
        """Delete a timetable by ID; returns the number of rows removed."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM timetables WHERE id = ?", (timetable_id,)
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_timetable(self, row: aiosqlite.Row) -> SavedTimetable:
        """Convert a database row to a SavedTimetable."""
        return SavedTimetable(
            id=row["id"],
            user_id=row["user_id"],
            data=TimetableData.from_dict(json.loads(row["data"])),
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )


class AnalyticsRepository:
    """Repository for daily analytics records."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @storage_errors("save analytics")
    async def upsert(self, analytics: DailyAnalytics) -> DailyAnalytics:
        """Create the record for (user_id, date), or update the stored one.

        Only the fields the request supplied replace stored values; the
        derived counters are recomputed. The existing row keeps its id and
        created_at. Read and write share one write transaction.
        """
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("BEGIN IMMEDIATE")
            cursor = await db.execute(
                "SELECT * FROM analytics WHERE user_id = ? AND date = ?",
                (analytics.user_id, analytics.date),
            )
            row = await cursor.fetchone()
            if row is not None:
                analytics = analytics.merged_onto(self._row_to_analytics(row))

            await db.execute(
                """
                INSERT INTO analytics
                (id, user_id, date, timetable_id, technique, energy_level, goal,
                 total_tasks, completed_tasks, total_work_time, total_break_time,
                 task_completions, productivity_score, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id, date) DO UPDATE SET
                    timetable_id = excluded.timetable_id,
                    technique = excluded.technique,
                    energy_level = excluded.energy_level,
                    goal = excluded.goal,
                    total_tasks = excluded.total_tasks,
                    completed_tasks = excluded.completed_tasks,
                    total_work_time = excluded.total_work_time,
                    total_break_time = excluded.total_break_time,
                    task_completions = excluded.task_completions,
                    productivity_score = excluded.productivity_score,
                    notes = excluded.notes,
                    updated_at = excluded.updated_at
                """,
                (
                    analytics.id or _new_id(),
                    analytics.user_id,
                    analytics.date,
                    analytics.timetable_id,
                    analytics.technique,
                    analytics.energy_level,
                    analytics.goal,
                    analytics.total_tasks,
                    analytics.completed_tasks,
                    analytics.total_work_time,
                    analytics.total_break_time,
                    json.dumps([t.to_dict() for t in analytics.task_completions]),
                    analytics.productivity_score,
                    analytics.notes,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            await db.commit()

        stored = await self.get(analytics.user_id, analytics.date)
        if stored is None:
            raise StorageError("Failed to save analytics", details="Record missing after upsert")
        return stored

    @storage_errors("fetch analytics")
    async def get(self, user_id: str, date: str) -> DailyAnalytics | None:
        """Get the record for a user's day."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM analytics WHERE user_id = ? AND date = ?",
                (user_id, date),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_analytics(row)

    @storage_errors("fetch analytics")
    async def list_by_user(
        self,
        user_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[DailyAnalytics]:
        """List a user's records within an inclusive date range, newest first."""
        query = "SELECT * FROM analytics WHERE user_id = ?"
        params: list = [user_id]
        if start_date:
            query += " AND date >= ?"
            params.append(start_date)
        if end_date:
            query += " AND date <= ?"
            params.append(end_date)
        query += " ORDER BY date DESC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_analytics(row) for row in rows]

    @storage_errors("update analytics")
    async def update(self, analytics: DailyAnalytics) -> DailyAnalytics:
        """Persist completion state and derived metrics of an existing record."""
        if analytics.id is None:
            raise ValueError("Analytics must have an ID to update")

        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE analytics SET
                    task_completions = ?, completed_tasks = ?,
                    productivity_score = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    json.dumps([t.to_dict() for t in analytics.task_completions]),
                    analytics.completed_tasks,
                    analytics.productivity_score,
                    now.isoformat(),
                    analytics.id,
                ),
            )
            await db.commit()
        analytics.updated_at = now
        return analytics

    @storage_errors("reset analytics")
    async def delete_by_user(self, user_id: str) -> int:
        """Delete all of a user's records; returns how many were removed."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM analytics WHERE user_id = ?", (user_id,)
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_analytics(self, row: aiosqlite.Row) -> DailyAnalytics:
        """Convert a database row to DailyAnalytics."""
        return DailyAnalytics(
            id=row["id"],
            user_id=row["user_id"],
            date=row["date"],
            timetable_id=row["timetable_id"],
            technique=row["technique"],
            energy_level=row["energy_level"],
            goal=row["goal"],
            total_tasks=row["total_tasks"] or 0,
            completed_tasks=row["completed_tasks"] or 0,
            total_work_time=row["total_work_time"] or 0,
            total_break_time=row["total_break_time"] or 0,
            task_completions=[
                TaskCompletion.from_dict(t) for t in json.loads(row["task_completions"] or "[]")
            ],
            productivity_score=row["productivity_score"] or 0,
            notes=row["notes"],
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )
