"""API routers."""

from . import analytics, catalog, generation, timetables

__all__ = ["analytics", "catalog", "generation", "timetables"]
