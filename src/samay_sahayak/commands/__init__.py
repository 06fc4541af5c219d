"""CLI commands for samay-sahayak."""

from .analytics import analytics
from .init import init
from .plan import ceo, plan
from .serve import serve
from .techniques import techniques
from .timetables import timetables

__all__ = [
    "analytics",
    "ceo",
    "init",
    "plan",
    "serve",
    "techniques",
    "timetables",
]
