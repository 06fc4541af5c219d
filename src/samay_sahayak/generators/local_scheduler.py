"""Local timetable generation without the completion service.

A greedy sort-and-pack: tasks are ordered by priority and laid end to end
from the session start time, with optional breaks between them and an
optional lunch break once the day gets long enough.
"""

from ..models.preferences import EnergyLevel, UserPreferences
from ..models.task import Task
from ..models.technique import SessionConfig
from ..models.timetable import ItemType, TimetableData, TimetableItem

MINUTES_PER_DAY = 24 * 60
LUNCH_THRESHOLD_MINUTES = 240
LUNCH_DURATION_MINUTES = 30
LUNCH_TIME = "12:00"

GENERAL_TIPS = [
    "Take regular breaks to maintain focus",
    "Start with your most challenging task",
    "Avoid multitasking during work sessions",
    "Use breaks for light physical activity",
]


def parse_clock(value: str) -> int:
    """Convert "HH:MM" to minutes after midnight."""
    hours, minutes = value.strip().split(":")[:2]
    return int(hours) * 60 + int(minutes)


def format_clock(minutes: int) -> str:
    """Convert minutes after midnight to "HH:MM", wrapping past midnight."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def sort_by_priority(tasks: list[Task]) -> list[Task]:
    """Order tasks high > medium > low, keeping input order within a rank."""
    return sorted(tasks, key=lambda task: task.priority.rank, reverse=True)


def build_recommendations(technique_name: str, preferences: UserPreferences) -> list[str]:
    """Fixed tips plus goal- and energy-specific ones."""
    candidates = [
        f"Focus on your goal: {preferences.daily_goal}" if preferences.daily_goal else None,
        *GENERAL_TIPS,
        f"Follow the {technique_name} principles for best results",
        "Consider shorter work sessions due to lower energy"
        if preferences.energy_level == EnergyLevel.LOW else None,
        "Use your high energy for complex tasks"
        if preferences.energy_level == EnergyLevel.HIGH else None,
    ]
    return [tip for tip in candidates if tip]


def generate_local_timetable(
    tasks: list[Task],
    technique_name: str,
    session_config: SessionConfig,
    preferences: UserPreferences | None = None,
    date: str = "",
) -> TimetableData:
    """Build a timetable locally.

    Each task gets one work block of min(estimated duration, session
    length). Deterministic for a given input order.
    """
    preferences = preferences or UserPreferences()
    ordered = sort_by_priority(tasks)

    schedule: list[TimetableItem] = []
    clock = parse_clock(session_config.start_time)
    total_work = 0
    total_break = 0

    for index, task in enumerate(ordered):
        duration = min(task.estimated_duration, session_config.session_length)
        schedule.append(
            TimetableItem(
                time=format_clock(clock),
                duration=duration,
                activity=task.title,
                type=ItemType.WORK.value,
                description=task.description or f"Focus on {task.title}",
                priority=task.priority.value,
                category=task.category,
            )
        )
        total_work += duration
        clock += duration

        is_last = index == len(ordered) - 1
        if not is_last and preferences.include_breaks:
            schedule.append(
                TimetableItem(
                    time=format_clock(clock),
                    duration=session_config.break_length,
                    activity="Break",
                    type=ItemType.BREAK.value,
                    description="Take a short break to refresh",
                )
            )
            total_break += session_config.break_length
            clock += session_config.break_length

    if total_work > LUNCH_THRESHOLD_MINUTES and preferences.include_meals:
        schedule.insert(
            len(schedule) // 2,
            TimetableItem(
                time=LUNCH_TIME,
                duration=LUNCH_DURATION_MINUTES,
                activity="Lunch Break",
                type=ItemType.LUNCH.value,
                description="Healthy meal and rest",
            ),
        )
        total_break += LUNCH_DURATION_MINUTES

    return TimetableData(
        date=date,
        daily_schedule=schedule,
        technique=technique_name,
        total_work_time=total_work,
        total_break_time=total_break,
        recommendations=build_recommendations(technique_name, preferences),
    )
