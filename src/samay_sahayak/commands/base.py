"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..models.timetable import TimetableData


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def echo_timetable(timetable: TimetableData) -> None:
    """Print a timetable as a schedule table followed by its recommendations."""
    click.echo()
    click.echo("=" * 60)
    title = f"Timetable: {timetable.technique}"
    if timetable.date:
        title += f" ({timetable.date})"
    click.echo(title)
    click.echo("=" * 60)

    if timetable.daily_briefing:
        click.echo()
        click.echo(timetable.daily_briefing)

    if not timetable.daily_schedule:
        click.echo()
        echo_warning("The schedule is empty")
    else:
        rows = []
        for item in timetable.daily_schedule:
            rows.append([
                item.time,
                f"{item.duration} min",
                item.item_type.value,
                item.activity,
                item.priority or "",
            ])
        click.echo()
        click.echo(format_table(["Time", "Duration", "Type", "Activity", "Priority"], rows))

    click.echo()
    click.echo(
        f"Work: {timetable.total_work_time} min | Breaks: {timetable.total_break_time} min"
    )

    if timetable.recommendations:
        click.echo()
        click.echo("Recommendations:")
        for tip in timetable.recommendations:
            click.echo(f"  - {tip}")
    click.echo()
