"""Daily analytics data models and metric calculations."""

import math
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone

from .timetable import TimetableData


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def productivity_score(completed: int, total: int) -> int:
    """Percentage of planned tasks completed, 0 when nothing was planned."""
    if not total or total <= 0:
        return 0
    return round_half_up(completed / total * 100)


@dataclass
class TaskCompletion:
    """Completion state of one scheduled work item."""

    task_id: str
    task_title: str = ""
    completed: bool = False
    completed_at: datetime | None = None

    def set_completed(self, completed: bool, when: datetime | None = None) -> None:
        """Mark complete (stamping the time) or incomplete (clearing it)."""
        self.completed = completed
        self.completed_at = (when or datetime.now(timezone.utc)) if completed else None

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "taskId": self.task_id,
            "taskTitle": self.task_title,
            "completed": self.completed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TaskCompletion":
        """Create from dictionary (wire format)."""
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"completed must be a boolean, got {completed!r}")
        completed_at = None
        if data.get("completedAt"):
            completed_at = datetime.fromisoformat(str(data["completedAt"]).replace("Z", "+00:00"))
        return cls(
            task_id=str(data.get("taskId", "")),
            task_title=data.get("taskTitle") or data.get("title") or "",
            completed=completed,
            completed_at=completed_at,
        )


def completions_for_timetable(timetable: TimetableData) -> list[TaskCompletion]:
    """Build the initial completion list for a timetable's work items.

    Ids are positional (``task-0``, ``task-1``...) over work items only, so
    they desync if the schedule is regenerated or reordered.
    """
    return [
        TaskCompletion(task_id=f"task-{index}", task_title=item.activity)
        for index, item in enumerate(timetable.work_items)
    ]


# Request keys a client may set, mapped to the attributes they fill
REQUEST_FIELDS = {
    "timetableId": "timetable_id",
    "technique": "technique",
    "energyLevel": "energy_level",
    "goal": "goal",
    "totalTasks": "total_tasks",
    "totalWorkTime": "total_work_time",
    "totalBreakTime": "total_break_time",
    "taskCompletions": "task_completions",
    "notes": "notes",
}


@dataclass
class DailyAnalytics:
    """Per-user, per-day task completion tracking.

    (user_id, date) is unique in storage.
    ``supplied`` names the attributes a request actually set; None means
    the whole record is authoritative.
    """

    user_id: str
    date: str
    timetable_id: str | None = None
    technique: str | None = None
    energy_level: str | None = None
    goal: str | None = None
    total_tasks: int = 0
    completed_tasks: int = 0
    total_work_time: int = 0
    total_break_time: int = 0
    task_completions: list[TaskCompletion] = field(default_factory=list)
    productivity_score: int = 0
    notes: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    supplied: frozenset | None = field(default=None, repr=False, compare=False)

    def merged_onto(self, existing: "DailyAnalytics") -> "DailyAnalytics":
        """Apply this record's supplied fields onto a stored one.

        Fields the request left out keep their stored values; the derived
        counters are recomputed over the result.
        """
        names = self.supplied if self.supplied is not None else set(REQUEST_FIELDS.values())
        merged = replace(existing, **{name: getattr(self, name) for name in names}, supplied=None)
        merged.recalculate()
        return merged

    def recalculate(self) -> None:
        """Recompute completed_tasks and productivity_score from completions."""
        self.completed_tasks = sum(1 for t in self.task_completions if t.completed)
        self.productivity_score = productivity_score(self.completed_tasks, self.total_tasks)

    def set_task_completed(self, task_id: str, completed: bool) -> bool:
        """Update one completion entry and recompute metrics.

        Returns False if no entry has that id; metrics are still recomputed.
        """
        found = False
        for completion in self.task_completions:
            if completion.task_id == task_id:
                completion.set_completed(completed)
                found = True
                break
        self.recalculate()
        return found

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "_id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "timetableId": self.timetable_id,
            "technique": self.technique,
            "energyLevel": self.energy_level,
            "goal": self.goal,
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "totalWorkTime": self.total_work_time,
            "totalBreakTime": self.total_break_time,
            "taskCompletions": [t.to_dict() for t in self.task_completions],
            "productivityScore": self.productivity_score,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_request(cls, data: dict) -> "DailyAnalytics":
        """Build from an API request body and derive the computed fields.

        Keys present in the body are recorded in ``supplied`` so an upsert
        only overwrites what the client sent.
        """
        completions = [TaskCompletion.from_dict(t) for t in data.get("taskCompletions") or []]
        total_tasks = data.get("totalTasks")
        supplied = {attr for key, attr in REQUEST_FIELDS.items() if key in data}
        if "task_completions" in supplied:
            # totalTasks falls back to the completion count
            supplied.add("total_tasks")
        analytics = cls(
            user_id=str(data["userId"]),
            date=str(data["date"]),
            timetable_id=data.get("timetableId"),
            technique=data.get("technique"),
            energy_level=data.get("energyLevel"),
            goal=data.get("goal"),
            total_tasks=int(total_tasks) if total_tasks is not None else len(completions),
            total_work_time=int(data.get("totalWorkTime") or 0),
            total_break_time=int(data.get("totalBreakTime") or 0),
            task_completions=completions,
            notes=data.get("notes"),
            supplied=frozenset(supplied),
        )
        analytics.recalculate()
        return analytics


@dataclass
class AnalyticsMetrics:
    """Aggregate metrics over a set of daily analytics records."""

    total_days: int = 0
    total_tasks_completed: int = 0
    total_work_time: int = 0
    average_productivity_score: int = 0
    most_used_technique: str = "None"
    average_tasks_per_day: int = 0
    average_work_time_per_day: int = 0
    current_streak: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary (wire format)."""
        return {
            "totalDays": self.total_days,
            "totalTasksCompleted": self.total_tasks_completed,
            "totalWorkTime": self.total_work_time,
            "averageProductivityScore": self.average_productivity_score,
            "mostUsedTechnique": self.most_used_technique,
            "averageTasksPerDay": self.average_tasks_per_day,
            "averageWorkTimePerDay": self.average_work_time_per_day,
            "currentStreak": self.current_streak,
        }


def most_used_technique(records: list[DailyAnalytics]) -> str:
    """Mode of the technique field, "None" when no record names one.

    Ties go to the technique encountered later in ``records`` order.
    """
    counts = Counter(r.technique for r in records if r.technique)
    if not counts:
        return "None"
    best = None
    for technique in counts:
        if best is None or counts[technique] >= counts[best]:
            best = technique
    return best


def current_streak(dates: list[str], today: date | None = None) -> int:
    """Count consecutive recorded days going back from today.

    Each step back (starting at today) may be at most one day; the first
    larger gap ends the streak. Unparseable dates are ignored.
    """
    today = today or date.today()
    parsed = []
    for value in dates:
        try:
            parsed.append(date.fromisoformat(value[:10]))
        except (TypeError, ValueError):
            continue

    streak = 0
    current = today
    for day in sorted(parsed, reverse=True):
        if abs((current - day).days) <= 1:
            streak += 1
            current = day
        else:
            break
    return streak


def compute_metrics(records: list[DailyAnalytics], today: date | None = None) -> AnalyticsMetrics:
    """Aggregate a user's analytics records."""
    total_days = len(records)
    if total_days == 0:
        return AnalyticsMetrics()

    total_completed = sum(r.completed_tasks for r in records)
    total_work = sum(r.total_work_time for r in records)
    total_score = sum(r.productivity_score for r in records)

    return AnalyticsMetrics(
        total_days=total_days,
        total_tasks_completed=total_completed,
        total_work_time=total_work,
        average_productivity_score=round_half_up(total_score / total_days),
        most_used_technique=most_used_technique(records),
        average_tasks_per_day=round_half_up(total_completed / total_days),
        average_work_time_per_day=round_half_up(total_work / total_days),
        current_streak=current_streak([r.date for r in records], today=today),
    )
