"""Database layer for samay-sahayak."""

from .engine import ConnectionState, DatabaseManager, get_db_path, init_db
from .repositories import AnalyticsRepository, TimetableRepository

__all__ = [
    "AnalyticsRepository",
    "ConnectionState",
    "DatabaseManager",
    "get_db_path",
    "init_db",
    "TimetableRepository",
]
