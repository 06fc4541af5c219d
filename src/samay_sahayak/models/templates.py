"""Timetable template presets."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from .preferences import EnergyLevel, TimeOfDay, UserPreferences
from .task import Priority, Task
from .technique import SessionConfig


@dataclass
class TaskTemplate:
    """A task blueprint stored in a template (no id until instantiated)."""

    title: str
    estimated_duration: int
    priority: Priority = Priority.MEDIUM
    category: str = "Other"
    description: str = ""

    def to_task(self) -> Task:
        """Create a concrete task with a fresh id."""
        return Task(
            title=self.title,
            estimated_duration=self.estimated_duration,
            priority=self.priority,
            category=self.category,
            description=self.description,
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "estimatedDuration": self.estimated_duration,
            "category": self.category,
        }


@dataclass
class TimetableTemplate:
    """A named bundle of technique, session, preferences and tasks."""

    id: str
    name: str
    description: str
    technique: str
    session_config: SessionConfig
    user_preferences: UserPreferences
    task_templates: list[TaskTemplate] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    is_default: bool = False

    def with_updates(self, **updates) -> "TimetableTemplate":
        """Return a copy with the given fields replaced."""
        return replace(self, **updates)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "technique": self.technique,
            "sessionConfig": self.session_config.to_dict(),
            "userPreferences": self.user_preferences.to_dict(),
            "taskTemplates": [t.to_dict() for t in self.task_templates],
            "createdAt": self.created_at.isoformat(),
            "isDefault": self.is_default,
        }


def default_templates() -> list[TimetableTemplate]:
    """Built-in presets (fresh copies on every call)."""
    return [
        TimetableTemplate(
            id="morning-person",
            name="Morning Person",
            description="Optimized for early risers who are most productive in the morning",
            technique="Pomodoro",
            session_config=SessionConfig(
                technique_id="pomodoro",
                session_length=25,
                break_length=5,
                start_time="06:00",
                end_time="18:00",
            ),
            user_preferences=UserPreferences(
                daily_goal="Maximize morning productivity",
                energy_level=EnergyLevel.HIGH,
                preferred_workout_time=TimeOfDay.MORNING,
                preferred_learning_time=TimeOfDay.MORNING,
            ),
            task_templates=[
                TaskTemplate("Morning Exercise", 30, Priority.HIGH, "Health",
                             "Start the day with physical activity"),
                TaskTemplate("Deep Work Session", 90, Priority.HIGH, "Work",
                             "Focus on most important tasks"),
            ],
            is_default=True,
        ),
        TimetableTemplate(
            id="night-owl",
            name="Night Owl",
            description="Perfect for those who work best in the evening hours",
            technique="Time Blocking",
            session_config=SessionConfig(
                technique_id="time-blocking",
                session_length=45,
                break_length=15,
                start_time="10:00",
                end_time="22:00",
            ),
            user_preferences=UserPreferences(
                daily_goal="Optimize evening productivity",
                energy_level=EnergyLevel.MEDIUM,
                preferred_workout_time=TimeOfDay.EVENING,
                preferred_learning_time=TimeOfDay.EVENING,
            ),
            task_templates=[
                TaskTemplate("Creative Work", 60, Priority.HIGH, "Creative",
                             "Evening creative sessions"),
                TaskTemplate("Evening Exercise", 45, Priority.MEDIUM, "Health",
                             "Workout session"),
            ],
            is_default=True,
        ),
        TimetableTemplate(
            id="balanced-day",
            name="Balanced Day",
            description="Well-rounded schedule for consistent productivity",
            technique="52/17 Rule",
            session_config=SessionConfig(
                technique_id="52-17",
                session_length=52,
                break_length=17,
                start_time="08:00",
                end_time="17:00",
            ),
            user_preferences=UserPreferences(
                daily_goal="Maintain steady productivity throughout the day",
                energy_level=EnergyLevel.MEDIUM,
                preferred_workout_time=TimeOfDay.AFTERNOON,
                preferred_learning_time=TimeOfDay.MORNING,
            ),
            task_templates=[
                TaskTemplate("Morning Planning", 30, Priority.HIGH, "Planning",
                             "Plan and organize the day"),
                TaskTemplate("Core Work", 120, Priority.HIGH, "Work",
                             "Main work tasks"),
            ],
            is_default=True,
        ),
    ]
