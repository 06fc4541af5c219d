"""Analytics commands (through the HTTP API)."""

import click

from ..client import PlannerApiClient
from ..exceptions import ApiError
from ..state.analytics import AnalyticsStore, DailyStats
from .base import async_command, echo_error, echo_info, echo_success, format_table


@click.group()
def analytics():
    """View and manage daily productivity analytics."""


def load_store(result: dict) -> AnalyticsStore:
    """Fill an analytics cache from a query response."""
    store = AnalyticsStore()
    metrics = result.get("metrics", {})
    records = result.get("analytics", [])

    total_tasks = sum(r.get("totalTasks", 0) for r in records)
    store.update_metrics(
        total_tasks_completed=metrics.get("totalTasksCompleted", 0),
        total_work_time=metrics.get("totalWorkTime", 0),
        total_break_time=sum(r.get("totalBreakTime", 0) for r in records),
        completion_rate=metrics.get("averageProductivityScore", 0),
        most_used_technique=metrics.get("mostUsedTechnique", "None"),
    )
    if total_tasks:
        store.update_metrics(
            average_session_length=round(metrics.get("totalWorkTime", 0) / total_tasks)
        )
    for record in records:
        store.add_daily_stats(
            DailyStats(
                date=record.get("date", ""),
                tasks_completed=record.get("completedTasks", 0),
                total_work_time=record.get("totalWorkTime", 0),
                technique=record.get("technique") or "",
                energy_level=record.get("energyLevel") or "",
                goal=record.get("goal") or "",
            )
        )
    store.update_streak(metrics.get("currentStreak", 0))
    return store


@analytics.command()
@click.option("--user", "-u", "user_id", required=True, help="User identifier")
@click.option("--start", "start_date", help="First date to include (YYYY-MM-DD)")
@click.option("--end", "end_date", help="Last date to include (YYYY-MM-DD)")
@click.pass_context
@async_command
async def show(ctx, user_id: str, start_date: str | None, end_date: str | None):
    """Show daily records and aggregate metrics."""
    try:
        async with PlannerApiClient() as api:
            result = await api.fetch_analytics(user_id, start_date, end_date)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    store = load_store(result)
    if not store.daily_stats:
        echo_info("No analytics recorded for this range")
        return

    scores = {r.get("date"): r.get("productivityScore", 0) for r in result.get("analytics", [])}
    rows = [
        [
            stats.date,
            stats.technique or "-",
            str(stats.tasks_completed),
            f"{stats.total_work_time} min",
            f"{scores.get(stats.date, 0)}%",
        ]
        for stats in store.daily_stats
    ]
    click.echo()
    click.echo(format_table(["Date", "Technique", "Completed", "Work", "Score"], rows))

    metrics = result.get("metrics", {})
    click.echo()
    click.echo(f"Days tracked:          {metrics.get('totalDays', 0)}")
    click.echo(f"Tasks completed:       {store.metrics.total_tasks_completed}")
    click.echo(f"Total work time:       {store.metrics.total_work_time} min")
    click.echo(f"Average productivity:  {metrics.get('averageProductivityScore', 0)}%")
    click.echo(f"Most used technique:   {store.metrics.most_used_technique}")
    click.echo(f"Tasks per day:         {metrics.get('averageTasksPerDay', 0)}")
    click.echo(f"Work time per day:     {metrics.get('averageWorkTimePerDay', 0)} min")
    click.echo(f"Current streak:        {store.current_streak} day(s)")
    click.echo()


@analytics.command()
@click.option("--user", "-u", "user_id", required=True, help="User identifier")
@click.option("--date", "-d", "day", required=True, help="Day of the record (YYYY-MM-DD)")
@click.argument("task_id")
@click.option("--undo", is_flag=True, help="Mark the task as not completed")
@click.pass_context
@async_command
async def complete(ctx, user_id: str, day: str, task_id: str, undo: bool):
    """Mark a task (e.g. task-0) completed for a day."""
    try:
        async with PlannerApiClient() as api:
            result = await api.update_task_completion(user_id, day, task_id, not undo)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    record = result["analytics"]
    echo_success(
        f"{record['completedTasks']}/{record['totalTasks']} tasks done "
        f"(score {record['productivityScore']}%)"
    )


@analytics.command()
@click.option("--user", "-u", "user_id", required=True, help="User identifier")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def reset(ctx, user_id: str, yes: bool):
    """Delete all analytics records for a user."""
    if not yes and not click.confirm(f"Delete all analytics for {user_id}?"):
        echo_info("Cancelled")
        return

    try:
        async with PlannerApiClient() as api:
            result = await api.reset_analytics(user_id)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(result.get("message", "Analytics reset"))
