"""User scheduling preferences."""

from dataclasses import dataclass
from enum import Enum


class EnergyLevel(str, Enum):
    """Self-reported energy level for the day."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeOfDay(str, Enum):
    """Preferred time slot for an activity."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NONE = "none"


@dataclass
class UserPreferences:
    """Preference bag sent alongside tasks.

    Every field is optional on the wire; prompt builders substitute their own
    defaults for anything left unset.
    """

    daily_goal: str = ""
    energy_level: EnergyLevel | None = None
    preferred_workout_time: TimeOfDay | None = None
    preferred_learning_time: TimeOfDay | None = None
    include_breaks: bool = True
    include_meals: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "dailyGoal": self.daily_goal,
            "energyLevel": self.energy_level.value if self.energy_level else None,
            "preferredWorkoutTime": (
                self.preferred_workout_time.value if self.preferred_workout_time else None
            ),
            "preferredLearningTime": (
                self.preferred_learning_time.value if self.preferred_learning_time else None
            ),
            "includeBreaks": self.include_breaks,
            "includeMeals": self.include_meals,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "UserPreferences":
        """Create from dictionary; ``None`` yields all defaults.

        Only an explicit ``false`` disables breaks or meals.
        """
        data = data or {}
        return cls(
            daily_goal=data.get("dailyGoal") or "",
            energy_level=_parse_enum(EnergyLevel, data.get("energyLevel")),
            preferred_workout_time=_parse_enum(TimeOfDay, data.get("preferredWorkoutTime")),
            preferred_learning_time=_parse_enum(TimeOfDay, data.get("preferredLearningTime")),
            include_breaks=data.get("includeBreaks") is not False,
            include_meals=data.get("includeMeals") is not False,
        )


def _parse_enum(enum_cls, value):
    """Parse an optional enum value, ignoring unknown strings."""
    if not value:
        return None
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return None
