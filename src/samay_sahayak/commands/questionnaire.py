"""Interactive planning questionnaire."""

import click
import questionary
from questionary import Style

from ..models.preferences import EnergyLevel, TimeOfDay, UserPreferences
from ..models.task import Priority
from ..models.templates import TimetableTemplate
from ..state import TaskStore, TechniqueStore, TemplateStore

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)

CUSTOM_TEMPLATE = "__custom__"
NEW_CATEGORY = "__new__"


async def ask(question: questionary.Question):
    """Ask a question, aborting the command on Ctrl+C."""
    answer = await question.ask_async()
    if answer is None:
        raise click.Abort()
    return answer


def _positive_int(value: str) -> bool | str:
    if value.strip().isdigit() and int(value) > 0:
        return True
    return "Enter a whole number of minutes greater than 0"


def _clock(value: str) -> bool | str:
    hours, _, minutes = value.partition(":")
    if hours.isdigit() and minutes.isdigit() and int(hours) < 24 and int(minutes) < 60:
        return True
    return "Use HH:MM"


class PlanningQuestionnaire:
    """Fills the task, technique and template stores from user answers."""

    def __init__(
        self,
        tasks: TaskStore,
        techniques: TechniqueStore,
        templates: TemplateStore,
    ):
        self.tasks = tasks
        self.techniques = techniques
        self.templates = templates

    async def collect(self) -> UserPreferences:
        """Run the questionnaire and return the collected preferences."""
        print("\n=== Plan Your Day ===\n")

        template = await self._choose_template()
        if template is not None:
            self._apply_template(template)
            print(f"\nLoaded template '{template.name}' with {len(self.tasks.tasks)} task(s).\n")
        else:
            await self._choose_technique()

        await self._adjust_session()
        await self._collect_tasks()
        return await self._collect_preferences(
            template.user_preferences if template else UserPreferences()
        )

    async def _choose_template(self) -> TimetableTemplate | None:
        choice = await ask(
            questionary.select(
                "Start from a template?",
                choices=[questionary.Choice("No, start from scratch", CUSTOM_TEMPLATE)]
                + [
                    questionary.Choice(f"{t.name} - {t.description}", t.id)
                    for t in self.templates.templates
                ],
                style=custom_style,
            )
        )
        if choice == CUSTOM_TEMPLATE:
            return None
        return self.templates.load(choice)

    def _apply_template(self, template: TimetableTemplate) -> None:
        self.techniques.select(template.session_config.technique_id)
        self.techniques.session_config = template.session_config
        for task_template in template.task_templates:
            self.tasks.add(
                title=task_template.title,
                estimated_duration=task_template.estimated_duration,
                priority=task_template.priority,
                category=task_template.category,
                description=task_template.description,
            )

    async def _choose_technique(self) -> None:
        technique_id = await ask(
            questionary.select(
                "Which time-management technique?",
                choices=[
                    questionary.Choice(
                        f"{t.name} ({t.default_session_length}/{t.default_break_length} min)",
                        t.id,
                    )
                    for t in self.techniques.techniques
                ],
                style=custom_style,
            )
        )
        self.techniques.select(technique_id)

    async def _adjust_session(self) -> None:
        config = self.techniques.session_config
        adjust = await ask(
            questionary.confirm(
                f"Session {config.session_length} min, break {config.break_length} min, "
                f"{config.start_time}-{config.end_time}. Adjust?",
                default=False,
                style=custom_style,
            )
        )
        if not adjust:
            return

        session_length = await ask(
            questionary.text(
                "Session length (minutes):",
                default=str(config.session_length),
                validate=_positive_int,
                style=custom_style,
            )
        )
        break_length = await ask(
            questionary.text(
                "Break length (minutes):",
                default=str(config.break_length),
                validate=_positive_int,
                style=custom_style,
            )
        )
        start_time = await ask(
            questionary.text(
                "Start time (HH:MM):", default=config.start_time, validate=_clock, style=custom_style
            )
        )
        end_time = await ask(
            questionary.text(
                "End time (HH:MM):", default=config.end_time, validate=_clock, style=custom_style
            )
        )
        self.techniques.update_session_config(
            session_length=int(session_length),
            break_length=int(break_length),
            start_time=start_time,
            end_time=end_time,
        )

    async def _collect_tasks(self) -> None:
        print("\nAdd the tasks you want scheduled. Leave the title blank to finish.\n")

        while True:
            title = await ask(questionary.text("Task title:", default="", style=custom_style))
            if not title.strip():
                if self.tasks.tasks:
                    break
                print("Add at least one task.")
                continue

            duration = await ask(
                questionary.text(
                    "Estimated duration (minutes):",
                    default="30",
                    validate=_positive_int,
                    style=custom_style,
                )
            )
            priority = await ask(
                questionary.select(
                    "Priority:",
                    choices=[
                        questionary.Choice("High", Priority.HIGH),
                        questionary.Choice("Medium", Priority.MEDIUM),
                        questionary.Choice("Low", Priority.LOW),
                    ],
                    default=Priority.MEDIUM,
                    style=custom_style,
                )
            )
            category = await ask(
                questionary.select(
                    "Category:",
                    choices=self.tasks.categories + [questionary.Choice("New category...", NEW_CATEGORY)],
                    style=custom_style,
                )
            )
            if category == NEW_CATEGORY:
                category = (await ask(questionary.text("Category name:", style=custom_style))).strip() or "Other"
                self.tasks.add_category(category)

            self.tasks.add(
                title=title.strip(),
                estimated_duration=int(duration),
                priority=priority,
                category=category,
            )

    async def _collect_preferences(self, defaults: UserPreferences) -> UserPreferences:
        goal = await ask(
            questionary.text(
                "Main goal for the day (optional):",
                default=defaults.daily_goal,
                style=custom_style,
            )
        )
        energy = await ask(
            questionary.select(
                "Energy level today:",
                choices=[
                    questionary.Choice("High", EnergyLevel.HIGH.value),
                    questionary.Choice("Medium", EnergyLevel.MEDIUM.value),
                    questionary.Choice("Low", EnergyLevel.LOW.value),
                ],
                default=(defaults.energy_level or EnergyLevel.MEDIUM).value,
                style=custom_style,
            )
        )
        workout = await ask(
            questionary.select(
                "Preferred workout time:",
                choices=[questionary.Choice(t.value.capitalize(), t.value) for t in TimeOfDay],
                default=(defaults.preferred_workout_time or TimeOfDay.NONE).value,
                style=custom_style,
            )
        )
        include_breaks = await ask(
            questionary.confirm("Include breaks?", default=defaults.include_breaks, style=custom_style)
        )
        include_meals = await ask(
            questionary.confirm("Include a lunch break?", default=defaults.include_meals, style=custom_style)
        )

        return UserPreferences(
            daily_goal=goal.strip(),
            energy_level=EnergyLevel(energy),
            preferred_workout_time=TimeOfDay(workout),
            preferred_learning_time=defaults.preferred_learning_time,
            include_breaks=include_breaks,
            include_meals=include_meals,
        )
