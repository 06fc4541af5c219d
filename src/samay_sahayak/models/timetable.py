"""Timetable data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from numbers import Number


class ItemType(str, Enum):
    """Kind of schedule entry.

    The completion service may return arbitrary strings; ``parse`` maps
    anything unrecognised to ``OTHER`` instead of failing.
    """

    WORK = "work"
    BREAK = "break"
    LUNCH = "lunch"
    HEALTH = "health"
    LEARNING = "learning"
    PERSONAL = "personal"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "ItemType":
        """Parse a free-form type string, falling back to OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER

    @property
    def is_rest(self) -> bool:
        """Whether this entry counts as break time."""
        return self in (ItemType.BREAK, ItemType.LUNCH)


# Keys with a model default; absent ones are remembered so they stay absent
_ITEM_DEFAULTED_KEYS = {"time", "duration", "activity", "type", "description"}
_ITEM_OPTIONAL_KEYS = {"priority", "category", "id"}
_ITEM_KEYS = _ITEM_DEFAULTED_KEYS | _ITEM_OPTIONAL_KEYS

_TIMETABLE_DEFAULTED_KEYS = {
    "date",
    "dailySchedule",
    "technique",
    "totalWorkTime",
    "totalBreakTime",
    "recommendations",
}
_TIMETABLE_KEYS = _TIMETABLE_DEFAULTED_KEYS | {"scheduleInsights", "dailyBriefing", "rawResponse"}


def _put_fields(data: dict, absent_keys: frozenset, fields: list[tuple]) -> None:
    """Write (key, value, default) triples into ``data``.

    A key missing from the source is skipped while it still holds its default.
    """
    for key, value, default in fields:
        if key in absent_keys and value == default:
            continue
        data[key] = value


@dataclass
class TimetableItem:
    """A single scheduled activity.

    No end time is modelled: ``time`` plus ``duration`` implies occupancy.
    ``type`` keeps the raw string so persisted blobs round-trip unchanged;
    use ``item_type`` for branching. Keys this model does not know (such as
    a CEO schedule's ``endTime``) are kept in ``extras``.
    """

    time: str
    duration: int
    activity: str
    type: str = ItemType.WORK.value
    description: str = ""
    priority: str | None = None
    category: str | None = None
    id: str | None = None
    extras: dict = field(default_factory=dict)
    absent_keys: frozenset = field(default_factory=frozenset, repr=False)

    @property
    def item_type(self) -> ItemType:
        return ItemType.parse(self.type)

    def to_dict(self) -> dict:
        """Convert to dictionary, omitting unset optional fields."""
        data = dict(self.extras)
        _put_fields(data, self.absent_keys, [
            ("time", self.time, ""),
            ("duration", self.duration, 0),
            ("activity", self.activity, ""),
            ("type", self.type, ItemType.WORK.value),
            ("description", self.description, ""),
        ])
        for key in ("priority", "category", "id"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TimetableItem":
        """Create from dictionary.

        Optional keys sent as null are kept verbatim alongside the unknown ones.
        """
        return cls(
            time=data.get("time", ""),
            duration=data.get("duration", 0),
            activity=data.get("activity", ""),
            type=data.get("type", ItemType.WORK.value),
            description=data.get("description", ""),
            priority=data.get("priority"),
            category=data.get("category"),
            id=data.get("id"),
            extras={
                k: v
                for k, v in data.items()
                if k not in _ITEM_KEYS or (k in _ITEM_OPTIONAL_KEYS and v is None)
            },
            absent_keys=frozenset(_ITEM_DEFAULTED_KEYS - data.keys()),
        )


@dataclass
class TimetableData:
    """A generated timetable for one calendar day.

    ``technique`` is the technique's display name, not a reference.
    Keys this model does not know are kept in ``extras`` and written back
    unchanged; keys missing from the source dict stay missing.
    """

    date: str = ""
    daily_schedule: list[TimetableItem] = field(default_factory=list)
    technique: str = "Custom"
    total_work_time: int = 0
    total_break_time: int = 0
    recommendations: list[str] = field(default_factory=list)
    schedule_insights: dict | None = None
    daily_briefing: str | None = None
    raw_response: str | None = None
    extras: dict = field(default_factory=dict)
    absent_keys: frozenset = field(default_factory=frozenset, repr=False)

    @property
    def work_items(self) -> list[TimetableItem]:
        """Schedule entries of type work, in schedule order."""
        return [item for item in self.daily_schedule if item.item_type == ItemType.WORK]

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        data = dict(self.extras)
        _put_fields(data, self.absent_keys, [
            ("date", self.date, ""),
            ("dailySchedule", [item.to_dict() for item in self.daily_schedule], []),
            ("technique", self.technique, "Custom"),
            ("totalWorkTime", self.total_work_time, 0),
            ("totalBreakTime", self.total_break_time, 0),
            ("recommendations", list(self.recommendations), []),
        ])
        if self.schedule_insights is not None:
            data["scheduleInsights"] = self.schedule_insights
        if self.daily_briefing is not None:
            data["dailyBriefing"] = self.daily_briefing
        if self.raw_response is not None:
            data["rawResponse"] = self.raw_response
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TimetableData":
        """Create from dictionary."""
        return cls(
            date=data.get("date", ""),
            daily_schedule=[
                TimetableItem.from_dict(item) for item in data.get("dailySchedule") or []
            ],
            technique=data.get("technique", "Custom"),
            total_work_time=data.get("totalWorkTime", 0),
            total_break_time=data.get("totalBreakTime", 0),
            recommendations=list(data.get("recommendations") or []),
            schedule_insights=data.get("scheduleInsights"),
            daily_briefing=data.get("dailyBriefing"),
            raw_response=data.get("rawResponse"),
            extras={
                k: v
                for k, v in data.items()
                if k not in _TIMETABLE_KEYS or (k not in _TIMETABLE_DEFAULTED_KEYS and v is None)
            },
            absent_keys=frozenset(_TIMETABLE_DEFAULTED_KEYS - data.keys()),
        )


def validate_timetable_data(data) -> list[str]:
    """Check a timetable blob against the canonical schema.

    Returns a list of problems; an empty list means the blob is valid.
    """
    if not isinstance(data, dict):
        return ["timetable must be a JSON object"]

    problems = []
    schedule = data.get("dailySchedule", [])
    if not isinstance(schedule, list):
        problems.append("dailySchedule must be a list")
    else:
        for index, item in enumerate(schedule):
            if not isinstance(item, dict):
                problems.append(f"dailySchedule[{index}] must be an object")
            elif "duration" in item and not _is_number(item["duration"]):
                problems.append(f"dailySchedule[{index}].duration must be a number")

    for key in ("totalWorkTime", "totalBreakTime"):
        if key in data and not _is_number(data[key]):
            problems.append(f"{key} must be a number")

    recommendations = data.get("recommendations", [])
    if not isinstance(recommendations, list):
        problems.append("recommendations must be a list")

    if "date" in data and not isinstance(data["date"], str):
        problems.append("date must be a string")

    return problems


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


@dataclass
class SavedTimetable:
    """A persisted timetable owned by a user.

    The blob is stored as sent and never updated in place once saved.
    """

    user_id: str
    data: TimetableData
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "_id": self.id,
            "userId": self.user_id,
            "data": self.data.to_dict(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
