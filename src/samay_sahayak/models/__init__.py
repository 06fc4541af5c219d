"""Data models for samay-sahayak."""

from .analytics import (
    AnalyticsMetrics,
    DailyAnalytics,
    TaskCompletion,
    compute_metrics,
    productivity_score,
)
from .preferences import EnergyLevel, TimeOfDay, UserPreferences
from .task import DEFAULT_CATEGORIES, Priority, Task
from .technique import TECHNIQUES, SessionConfig, Technique, get_technique
from .templates import TaskTemplate, TimetableTemplate, default_templates
from .timetable import ItemType, SavedTimetable, TimetableData, TimetableItem

__all__ = [
    "AnalyticsMetrics",
    "compute_metrics",
    "DailyAnalytics",
    "DEFAULT_CATEGORIES",
    "default_templates",
    "EnergyLevel",
    "get_technique",
    "ItemType",
    "Priority",
    "productivity_score",
    "SavedTimetable",
    "SessionConfig",
    "Task",
    "TaskCompletion",
    "TaskTemplate",
    "Technique",
    "TECHNIQUES",
    "TimeOfDay",
    "TimetableData",
    "TimetableItem",
    "TimetableTemplate",
    "UserPreferences",
]
