"""AI-assisted daily timetable planner."""

__version__ = "0.1.0"
