"""Service layer."""

from .analytics import AnalyticsService

__all__ = ["AnalyticsService"]
