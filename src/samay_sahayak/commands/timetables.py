"""Saved timetable commands (through the HTTP API)."""

import json

import click
import pyperclip

from ..client import PlannerApiClient
from ..exceptions import ApiError
from ..models.timetable import TimetableData
from .base import async_command, echo_error, echo_info, echo_success, echo_timetable, format_table


@click.group()
def timetables():
    """Manage saved timetables.

    Talks to a running server (API_URL, default http://localhost:5000).
    """


@timetables.command(name="list")
@click.option("--user", "-u", "user_id", required=True, help="User identifier")
@click.pass_context
@async_command
async def list_timetables(ctx, user_id: str):
    """List a user's saved timetables, newest first."""
    try:
        async with PlannerApiClient() as api:
            result = await api.fetch_timetables(user_id)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    saved = result.get("timetables", [])
    if not saved:
        echo_info("No timetables found. Create one with 'samay plan --save'")
        return

    rows = []
    for entry in saved:
        data = entry.get("data", {})
        rows.append([
            entry.get("_id", ""),
            data.get("date") or "-",
            data.get("technique", ""),
            str(len(data.get("dailySchedule", []))),
            (entry.get("createdAt") or "")[:16].replace("T", " "),
        ])

    click.echo()
    click.echo(format_table(["ID", "Date", "Technique", "Items", "Created"], rows))
    click.echo()
    click.echo(f"Total: {len(saved)} timetable(s)")


@timetables.command()
@click.argument("timetable_id")
@click.pass_context
@async_command
async def show(ctx, timetable_id: str):
    """Show one saved timetable."""
    try:
        async with PlannerApiClient() as api:
            result = await api.get_timetable(timetable_id)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_timetable(TimetableData.from_dict(result["timetable"]["data"]))


@timetables.command()
@click.argument("timetable_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, timetable_id: str, yes: bool):
    """Delete a saved timetable."""
    if not yes and not click.confirm(f"Delete timetable {timetable_id}?"):
        echo_info("Cancelled")
        return

    try:
        async with PlannerApiClient() as api:
            await api.delete_timetable(timetable_id)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Deleted timetable {timetable_id}")


def timetable_to_text(timetable: TimetableData) -> str:
    """Render a timetable as plain text for pasting into notes or calendars."""
    lines = [f"{timetable.date or 'Timetable'} - {timetable.technique}", ""]
    for item in timetable.daily_schedule:
        line = f"{item.time}  {item.activity} ({item.duration} min)"
        if item.item_type.is_rest:
            line += f" [{item.item_type.value}]"
        lines.append(line)
    lines.append("")
    lines.append(f"Work: {timetable.total_work_time} min, breaks: {timetable.total_break_time} min")
    return "\n".join(lines)


@timetables.command()
@click.argument("timetable_id")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--clipboard", "-c", is_flag=True, help="Copy to clipboard instead of printing")
@click.option("--output", "-o", type=click.Path(), help="Write to file instead of stdout")
@click.pass_context
@async_command
async def export(ctx, timetable_id: str, format: str, clipboard: bool, output: str | None):
    """Export a saved timetable as text or JSON.

    Examples:

        # Copy a plain-text schedule to the clipboard
        samay timetables export <id> --clipboard

        # Save the raw data
        samay timetables export <id> --format json -o today.json
    """
    try:
        async with PlannerApiClient() as api:
            result = await api.get_timetable(timetable_id)
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)

    data = result["timetable"]["data"]
    if format == "json":
        content = json.dumps(data, indent=2)
    else:
        content = timetable_to_text(TimetableData.from_dict(data))

    if clipboard:
        pyperclip.copy(content)
        echo_success("Copied to clipboard!")
    elif output:
        with open(output, "w") as f:
            f.write(content)
        echo_success(f"Exported to {output}")
    else:
        click.echo(content)
