"""Time-management technique catalog and session configuration."""

from dataclasses import dataclass, field, replace

DEFAULT_WORK_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "17:00"


@dataclass(frozen=True)
class Technique:
    """A named time-management method with default session timings."""

    id: str
    name: str
    description: str
    default_session_length: int
    default_break_length: int
    color: str = "#6b7280"

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "defaultSessionLength": self.default_session_length,
            "defaultBreakLength": self.default_break_length,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Technique":
        """Create from dictionary.

        Callers may send only ``name`` and ``description``; catalog defaults
        fill in the rest when the id or name matches a known technique.
        """
        known = get_technique(data.get("id") or "") or find_technique_by_name(data.get("name"))
        return cls(
            id=data.get("id") or (known.id if known else "custom"),
            name=data.get("name") or (known.name if known else "Custom"),
            description=data.get("description") or (known.description if known else ""),
            default_session_length=int(
                data.get("defaultSessionLength") or (known.default_session_length if known else 25)
            ),
            default_break_length=int(
                data.get("defaultBreakLength") or (known.default_break_length if known else 5)
            ),
            color=data.get("color") or (known.color if known else "#6b7280"),
        )


TECHNIQUES: list[Technique] = [
    Technique(
        id="pomodoro",
        name="Pomodoro Technique",
        description=(
            "Work for 25 minutes, then take a 5-minute break. "
            "After 4 sessions, take a longer 15-30 minute break."
        ),
        default_session_length=25,
        default_break_length=5,
        color="#ef4444",
    ),
    Technique(
        id="time-blocking",
        name="Time Blocking",
        description="Allocate specific time blocks for different tasks and activities throughout your day.",
        default_session_length=60,
        default_break_length=15,
        color="#3b82f6",
    ),
    Technique(
        id="timeboxing",
        name="Timeboxing",
        description="Set strict time limits for tasks to increase focus and prevent over-engineering.",
        default_session_length=45,
        default_break_length=10,
        color="#10b981",
    ),
    Technique(
        id="eat-that-frog",
        name="Eat That Frog",
        description="Tackle your most challenging task first thing in the morning.",
        default_session_length=90,
        default_break_length=20,
        color="#f59e0b",
    ),
    Technique(
        id="52-17",
        name="52/17 Rule",
        description="Work for 52 minutes, then take a 17-minute break to maintain peak productivity.",
        default_session_length=52,
        default_break_length=17,
        color="#8b5cf6",
    ),
]


def get_technique(technique_id: str) -> Technique | None:
    """Look up a catalog technique by id."""
    for technique in TECHNIQUES:
        if technique.id == technique_id:
            return technique
    return None


def find_technique_by_name(name: str | None) -> Technique | None:
    """Look up a catalog technique by display name (case-insensitive)."""
    needle = str(name or "").strip().lower()
    if not needle:
        return None
    for technique in TECHNIQUES:
        if technique.name.lower() == needle:
            return technique
    return None


@dataclass
class SessionConfig:
    """Work/break timing for a planning session.

    ``start_time`` is expected to precede ``end_time`` but this is not
    enforced.
    """

    technique_id: str
    session_length: int
    break_length: int
    work_days: list[str] = field(default_factory=lambda: list(DEFAULT_WORK_DAYS))
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME

    @classmethod
    def for_technique(cls, technique: Technique) -> "SessionConfig":
        """Seed a session config from a technique's defaults."""
        return cls(
            technique_id=technique.id,
            session_length=technique.default_session_length,
            break_length=technique.default_break_length,
        )

    def patch(self, **updates) -> "SessionConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **updates)

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "techniqueId": self.technique_id,
            "sessionLength": self.session_length,
            "breakLength": self.break_length,
            "workDays": list(self.work_days),
            "startTime": self.start_time,
            "endTime": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionConfig":
        """Create from dictionary (wire format)."""
        return cls(
            technique_id=data.get("techniqueId", "custom"),
            session_length=int(data["sessionLength"]),
            break_length=int(data["breakLength"]),
            work_days=list(data.get("workDays") or []),
            start_time=data.get("startTime") or DEFAULT_START_TIME,
            end_time=data.get("endTime") or DEFAULT_END_TIME,
        )
