"""In-process state containers driven by the interactive CLI.

Each store is independent and updated synchronously; none of them
enforces invariants across stores.
"""

from .analytics import AnalyticsStore, DailyStats, ProductivityMetrics
from .tasks import TaskStore
from .technique import TechniqueStore
from .templates import TemplateStore
from .timetable import TimetableStore

__all__ = [
    "AnalyticsStore",
    "DailyStats",
    "ProductivityMetrics",
    "TaskStore",
    "TechniqueStore",
    "TemplateStore",
    "TimetableStore",
]
