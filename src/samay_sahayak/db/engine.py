"""Database engine setup, schema initialization and connection management."""

import asyncio
import logging
from enum import Enum
from pathlib import Path

import aiosqlite

from .. import config
from ..exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


def get_db_path(db_path: Path | None = None) -> Path:
    """Get the database file path, creating its parent directory."""
    if db_path is None:
        db_path = config.DATABASE_PATH
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Saved timetables: one opaque (but validated) blob per row
        await db.execute("""
            CREATE TABLE IF NOT EXISTS timetables (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                data TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        # Daily analytics: one row per (user_id, date)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS analytics (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                timetable_id TEXT,
                technique TEXT,
                energy_level TEXT,
                goal TEXT,
                total_tasks INTEGER DEFAULT 0,
                completed_tasks INTEGER DEFAULT 0,
                total_work_time INTEGER DEFAULT 0,
                total_break_time INTEGER DEFAULT 0,
                task_completions TEXT DEFAULT '[]',
                productivity_score INTEGER DEFAULT 0,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_timetables_user
            ON timetables(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_analytics_user
            ON analytics(user_id)
        """)
        await db.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_analytics_user_date
            ON analytics(user_id, date)
        """)

        await db.commit()


class ConnectionState(str, Enum):
    """Lifecycle state of the database connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    ERROR = "error"


class DatabaseManager:
    """Owns database readiness for the web app.

    Repositories open their own short-lived connections; the manager makes
    sure the schema exists and the file is reachable, retries a bounded
    number of times on startup, and exposes the current state so handlers
    can fail fast while the store is down.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ):
        self.db_path = get_db_path(db_path)
        self.max_retries = max_retries if max_retries is not None else config.DB_CONNECT_RETRIES
        self.retry_delay = retry_delay if retry_delay is not None else config.DB_RETRY_DELAY
        self.state = ConnectionState.DISCONNECTED
        self.last_error: str | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED

    def _set_state(self, state: ConnectionState) -> None:
        if state != self.state:
            logger.info("Database state: %s -> %s", self.state.value, state.value)
        self.state = state

    async def _ping(self) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("SELECT 1")

    async def connect(self, max_attempts: int | None = None) -> None:
        """Initialize the schema and verify connectivity, with bounded retry.

        Args:
            max_attempts: Override for the configured retry count

        Raises:
            DatabaseUnavailableError: if every attempt fails
        """
        async with self._lock:
            if self.is_connected:
                return

            attempts = max_attempts or self.max_retries
            self._set_state(ConnectionState.CONNECTING)
            for attempt in range(1, attempts + 1):
                try:
                    await init_db(self.db_path)
                    await self._ping()
                except (aiosqlite.Error, OSError) as e:
                    self.last_error = str(e)
                    logger.error(
                        "Database connection attempt %d/%d failed: %s",
                        attempt,
                        attempts,
                        e,
                    )
                    if attempt < attempts:
                        self._set_state(ConnectionState.RECONNECTING)
                        await asyncio.sleep(self.retry_delay)
                    continue

                self.last_error = None
                self._set_state(ConnectionState.CONNECTED)
                logger.info("Database connected at %s", self.db_path)
                return

            self._set_state(ConnectionState.ERROR)
            raise DatabaseUnavailableError(
                "Database connection failed", details=self.last_error
            )

    async def check(self) -> bool:
        """Ping the database; on failure move to the error state."""
        if self.state not in (ConnectionState.CONNECTED, ConnectionState.ERROR):
            return False
        try:
            await self._ping()
        except (aiosqlite.Error, OSError) as e:
            self.last_error = str(e)
            logger.error("Database health check failed: %s", e)
            self._set_state(ConnectionState.ERROR)
            return False
        self._set_state(ConnectionState.CONNECTED)
        return True

    async def ensure_connected(self) -> None:
        """Make a single reconnect attempt if not currently connected.

        Raises:
            DatabaseUnavailableError: if the database stays unreachable
        """
        if self.is_connected:
            return
        await self.connect(max_attempts=1)

    async def close(self) -> None:
        """Mark the manager disconnected (connections are per-operation)."""
        async with self._lock:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.info("Database connection closed")

    def health(self) -> dict:
        """Queryable connection health."""
        return {
            "state": self.state.value,
            "path": str(self.db_path),
            "error": self.last_error,
        }
