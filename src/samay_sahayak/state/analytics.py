"""Client-side analytics cache."""

from dataclasses import asdict, dataclass, field, replace

DEFAULT_WEEKLY_GOAL = 5


@dataclass
class ProductivityMetrics:
    total_tasks_completed: int = 0
    total_work_time: int = 0
    total_break_time: int = 0
    average_session_length: int = 0
    completion_rate: int = 0
    most_productive_time: str = "morning"
    most_used_technique: str = "Pomodoro"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DailyStats:
    """One day's summary as shown in the analytics view."""

    date: str
    tasks_completed: int = 0
    total_work_time: int = 0
    technique: str = ""
    energy_level: str = ""
    goal: str = ""


@dataclass
class AnalyticsStore:
    metrics: ProductivityMetrics = field(default_factory=ProductivityMetrics)
    daily_stats: list[DailyStats] = field(default_factory=list)
    weekly_goal: int = DEFAULT_WEEKLY_GOAL
    current_streak: int = 0
    is_loading: bool = False
    error: str | None = None

    def update_metrics(self, **updates) -> None:
        """Patch the cached metrics."""
        self.metrics = replace(self.metrics, **updates)

    def add_daily_stats(self, stats: DailyStats) -> None:
        self.daily_stats.append(stats)

    def set_weekly_goal(self, goal: int) -> None:
        self.weekly_goal = goal

    def update_streak(self, streak: int) -> None:
        self.current_streak = streak

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def set_error(self, error: str | None) -> None:
        self.error = error

    def reset(self) -> None:
        """Clear metrics, daily stats and the streak; the weekly goal is kept."""
        self.metrics = ProductivityMetrics()
        self.daily_stats = []
        self.current_streak = 0
