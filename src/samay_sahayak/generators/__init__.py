"""Timetable generators that run without the completion service."""

from .local_scheduler import generate_local_timetable

__all__ = ["generate_local_timetable"]
