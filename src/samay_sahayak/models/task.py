"""Task data models."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4


class Priority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Numeric rank used for ordering (high first)."""
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}

DEFAULT_CATEGORIES = ["Work", "Personal", "Health", "Learning", "Other"]


def new_task_id() -> str:
    """Generate an opaque task identifier."""
    return uuid4().hex[:12]


@dataclass
class Task:
    """A task the user wants scheduled."""

    title: str
    estimated_duration: int  # minutes
    priority: Priority = Priority.MEDIUM
    category: str = "Other"
    description: str = ""
    id: str = field(default_factory=new_task_id)

    def __post_init__(self):
        if not isinstance(self.priority, Priority):
            self.priority = Priority(self.priority)
        if self.estimated_duration <= 0:
            raise ValueError(
                f"Task '{self.title}' must have a positive estimated duration"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "estimatedDuration": self.estimated_duration,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create from dictionary (wire format)."""
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(
            title=data["title"],
            estimated_duration=int(data["estimatedDuration"]),
            priority=Priority(data.get("priority", "medium")),
            category=data.get("category") or "Other",
            description=data.get("description") or "",
            **kwargs,
        )
