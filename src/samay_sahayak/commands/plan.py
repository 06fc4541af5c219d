"""Day planning commands."""

from datetime import date

import click

from ..client import PlannerApiClient
from ..exceptions import ApiError
from ..generators.local_scheduler import generate_local_timetable
from ..models.analytics import completions_for_timetable
from ..models.preferences import EnergyLevel, TimeOfDay, UserPreferences
from ..models.timetable import TimetableData
from ..state import TaskStore, TechniqueStore, TemplateStore, TimetableStore
from .base import async_command, echo_error, echo_info, echo_success, echo_timetable
from .questionnaire import PlanningQuestionnaire


async def save_plan(
    api: PlannerApiClient,
    user_id: str,
    timetable: TimetableData,
    preferences: UserPreferences,
) -> str:
    """Save the timetable and seed the day's analytics record.

    Returns the saved timetable id.
    """
    saved = await api.save_timetable(user_id, timetable.to_dict())
    timetable_id = saved["timetable"]["_id"]

    completions = completions_for_timetable(timetable)
    await api.save_analytics({
        "userId": user_id,
        "date": timetable.date,
        "timetableId": timetable_id,
        "technique": timetable.technique,
        "energyLevel": preferences.energy_level.value if preferences.energy_level else None,
        "goal": preferences.daily_goal,
        "totalTasks": len(completions),
        "totalWorkTime": timetable.total_work_time,
        "totalBreakTime": timetable.total_break_time,
        "taskCompletions": [c.to_dict() for c in completions],
    })
    return timetable_id


@click.command()
@click.option("--user", "-u", "user_id", help="User identifier (required with --save)")
@click.option("--ai", "use_ai", is_flag=True, help="Generate through the API's completion service")
@click.option("--save", is_flag=True, help="Save the timetable and start tracking the day")
@click.option("--date", "day", default=None, help="Day to plan (YYYY-MM-DD, default today)")
@click.pass_context
@async_command
async def plan(ctx, user_id: str | None, use_ai: bool, save: bool, day: str | None):
    """Plan a day interactively.

    Collects tasks, a technique and preferences, then builds the timetable
    locally (or with the completion service when --ai is given).

    Examples:

        # Plan locally and just print the result
        samay plan

        # Plan with AI and save it for user "me"
        samay plan --ai --save --user me
    """
    if save and not user_id:
        echo_error("--save needs --user")
        ctx.exit(1)
    day = day or date.today().isoformat()

    tasks = TaskStore()
    techniques = TechniqueStore()
    templates = TemplateStore()
    timetable_store = TimetableStore()

    preferences = await PlanningQuestionnaire(tasks, techniques, templates).collect()
    technique = techniques.technique
    technique_name = technique.name if technique else "Custom"

    timetable_store.set_loading(True)
    if use_ai:
        echo_info("Generating timetable with AI...")
        try:
            async with PlannerApiClient() as api:
                result = await api.generate_timetable(
                    [t.to_dict() for t in tasks.tasks],
                    technique.to_dict() if technique else {"name": technique_name},
                    techniques.session_config.to_dict(),
                    preferences.to_dict(),
                )
            timetable = TimetableData.from_dict(result["timetable"])
            timetable.date = timetable.date or day
            timetable_store.set(timetable)
        except ApiError as e:
            timetable_store.set_error(e.message)
    else:
        timetable_store.set(
            generate_local_timetable(
                tasks.tasks, technique_name, techniques.session_config, preferences, date=day
            )
        )
    timetable_store.set_loading(False)

    if timetable_store.error:
        echo_error(f"Failed to generate timetable: {timetable_store.error}")
        ctx.exit(1)

    echo_timetable(timetable_store.timetable)

    if save:
        try:
            async with PlannerApiClient() as api:
                timetable_id = await save_plan(api, user_id, timetable_store.timetable, preferences)
        except ApiError as e:
            echo_error(f"Failed to save timetable: {e.message}")
            ctx.exit(1)
        echo_success(f"Saved timetable {timetable_id}")
        echo_info(f"Mark tasks done with: samay analytics complete --user {user_id} --date {day} task-0")


@click.command()
@click.argument("random_plan")
@click.option("--user", "-u", "user_id", help="User identifier (required with --save)")
@click.option(
    "--energy",
    type=click.Choice([e.value for e in EnergyLevel]),
    default=None,
    help="Energy level today",
)
@click.option(
    "--workout",
    type=click.Choice([t.value for t in TimeOfDay]),
    default=None,
    help="Preferred workout time",
)
@click.option("--save", is_flag=True, help="Save the timetable and start tracking the day")
@click.option("--date", "day", default=None, help="Day being planned (YYYY-MM-DD, default today)")
@click.pass_context
@async_command
async def ceo(
    ctx,
    random_plan: str,
    user_id: str | None,
    energy: str | None,
    workout: str | None,
    save: bool,
    day: str | None,
):
    """Turn a free-text brain dump into an executive-style schedule.

    Example:

        samay ceo "finish the report, gym, call mom, review PRs" --energy high
    """
    if save and not user_id:
        echo_error("--save needs --user")
        ctx.exit(1)

    preferences = UserPreferences.from_dict(
        {"energyLevel": energy, "preferredWorkoutTime": workout}
    )

    echo_info("Generating CEO timetable with AI...")
    try:
        async with PlannerApiClient() as api:
            result = await api.generate_ceo_timetable(random_plan, preferences.to_dict())
            timetable = TimetableData.from_dict(result["timetable"])
            timetable.date = timetable.date or day or date.today().isoformat()
            echo_timetable(timetable)

            if save:
                timetable_id = await save_plan(api, user_id, timetable, preferences)
                echo_success(f"Saved timetable {timetable_id}")
    except ApiError as e:
        echo_error(e.message)
        ctx.exit(1)
