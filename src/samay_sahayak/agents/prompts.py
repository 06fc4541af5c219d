"""Prompt templates for timetable generation."""

from ..models.preferences import UserPreferences
from ..models.task import Task
from ..models.technique import SessionConfig, Technique


def format_task_list(tasks: list[Task]) -> str:
    """Format tasks one per line for inclusion in prompts."""
    return "\n".join(
        f"- {task.title} ({task.estimated_duration} min, {task.priority.value} priority, {task.category})"
        for task in tasks
    )


def format_user_context(preferences: UserPreferences) -> str:
    """Format the preference bag, substituting defaults for unset values."""
    lines = [
        f"Main Goal: {preferences.daily_goal}" if preferences.daily_goal else "No specific goal mentioned",
        f"Energy Level: {_value(preferences.energy_level, 'medium')}",
        f"Preferred Workout Time: {_value(preferences.preferred_workout_time, 'morning')}",
        f"Preferred Learning Time: {_value(preferences.preferred_learning_time, 'morning')}",
        f"Include Breaks: {'Yes' if preferences.include_breaks else 'No'}",
        f"Include Meals: {'Yes' if preferences.include_meals else 'No'}",
    ]
    return "\n".join(lines)


def format_session_config(session_config: SessionConfig) -> str:
    """Format the session configuration block."""
    return "\n".join([
        f"- Session Length: {session_config.session_length} minutes",
        f"- Break Length: {session_config.break_length} minutes",
        f"- Work Hours: {session_config.start_time} - {session_config.end_time}",
        f"- Work Days: {', '.join(session_config.work_days)}",
    ])


def _value(enum_value, default: str) -> str:
    return enum_value.value if enum_value is not None else default


SCHEDULING_PRINCIPLES = """SCHEDULING PRINCIPLES TO FOLLOW:

1. **Common Sense & Context Awareness:**
   - Don't schedule outdoor activities (park, walk, exercise) during peak heat hours (12-3 PM)
   - Schedule exercise in morning or evening when temperatures are comfortable
   - Place high-priority tasks during peak energy hours (usually 9-11 AM)
   - Schedule creative tasks when energy is moderate
   - Place routine tasks during lower energy periods

2. **Energy Level Optimization:**
   - Low Energy: Shorter sessions, more breaks, gentle tasks first
   - Medium Energy: Balanced approach with mix of task types
   - High Energy: Longer sessions, tackle challenging tasks first

3. **Task Type Intelligence:**
   - Work/Professional: Schedule during business hours
   - Health/Exercise: Morning or evening, avoid peak heat
   - Learning/Reading: During preferred learning time or quiet hours
   - Personal: Flexible timing based on task nature
   - Creative: When energy is moderate to high

4. **Break Strategy:**
   - Short breaks (5-10 min) between work sessions
   - Longer breaks (15-30 min) every 2-3 hours
   - Lunch break around 12-1 PM
   - Use breaks for light stretching, hydration, or brief walks

5. **Priority Handling:**
   - High priority tasks get prime time slots
   - Medium priority tasks fill remaining time
   - Low priority tasks can be scheduled during lower energy periods

6. **Realistic Timing:**
   - Account for task transitions and setup time
   - Don't over-schedule - leave buffer time
   - Consider task complexity and mental load"""


TIMETABLE_RESPONSE_SCHEMA = """{{
  "dailySchedule": [
    {{
      "time": "09:00",
      "duration": 25,
      "activity": "Task Name",
      "type": "work|break|lunch|health|learning|personal",
      "description": "Brief description with reasoning",
      "priority": "high|medium|low",
      "category": "Work|Health|Learning|Personal"
    }}
  ],
  "technique": "{technique_name}",
  "totalWorkTime": 480,
  "totalBreakTime": 60,
  "recommendations": [
    "Specific recommendation based on user's goal",
    "Energy management tip",
    "Productivity optimization suggestion"
  ],
  "scheduleInsights": {{
    "peakProductivityTime": "9:00-11:00",
    "recommendedBreaks": "Every 90 minutes",
    "energyOptimization": "High priority tasks scheduled during peak hours"
  }}
}}"""


TIMETABLE_PROMPT = """You are an expert productivity coach and AI assistant with deep understanding of human psychology, circadian rhythms, and optimal scheduling. Your mission is to create a highly efficient, realistic, and healthy daily timetable that maximizes the user's productivity and well-being.

USER CONTEXT:
{user_context}

TASKS TO SCHEDULE:
{task_list}

TECHNIQUE: {technique_name}
{technique_description}

SESSION CONFIGURATION:
{session_config}

{principles}

INSTRUCTIONS:
1. Analyze the user's goal and energy level to determine optimal task placement
2. Apply common sense to outdoor activities and exercise timing
3. Respect the user's preferred times for specific activities
4. Create a balanced schedule that alternates between focused work and breaks
5. Ensure the schedule is realistic and achievable
6. Return the response as a single JSON object inside a ```json fenced block, in the following format:

```json
{schema}
```

Make the schedule truly personalized and intelligent. Consider the user's specific context and create a timetable that will actually help them achieve their goals."""


def build_timetable_prompt(
    tasks: list[Task],
    technique: Technique,
    session_config: SessionConfig,
    preferences: UserPreferences | None = None,
) -> str:
    """Build the timetable generation prompt.

    Every input field is embedded as literal text, followed by the fixed
    instructions and the required JSON response schema.
    """
    preferences = preferences or UserPreferences()
    return TIMETABLE_PROMPT.format(
        user_context=format_user_context(preferences),
        task_list=format_task_list(tasks),
        technique_name=technique.name,
        technique_description=technique.description,
        session_config=format_session_config(session_config),
        principles=SCHEDULING_PRINCIPLES,
        schema=TIMETABLE_RESPONSE_SCHEMA.format(technique_name=technique.name),
    )


CEO_PROMPT = """You are an elite Executive Assistant, tasked with structuring the day for a high-performing CEO. Your goal is to transform a raw, unstructured brain-dump of tasks and feelings into a strategic, optimized, and actionable daily plan.

**CEO's Brain-Dump:**
"{random_plan}"

**CEO's State:**
- Energy Level: {energy_level}
- Preferred Workout Time: {workout_time}

**Your Task:**
Analyze the brain-dump and create a structured, CEO-level daily schedule. Follow these principles:

1.  **Prioritize ruthlessly:** Identify the "one big thing" for the day and allocate prime, focused time for it.
2.  **Block time strategically:** Don't just list tasks. Create blocks of time for focused work, meetings, creative thinking, and personal tasks. Use time blocking.
3.  **Manage energy, not just time:** Schedule high-focus, creative tasks when energy is likely to be highest (e.g., morning). Schedule administrative or less demanding tasks for lower energy periods (e.g., after lunch).
4.  **Incorporate breaks and recovery:** A CEO's schedule is a marathon, not a sprint. Include strategic breaks for lunch, exercise, and short pauses to recharge.
5.  **Be proactive:** If the CEO mentions a vague task like "prepare for presentation," break it down into actionable steps (e.g., "Review presentation draft," "Practice delivery," "Finalize slides").
6.  **Add buffer time:** Do not schedule back-to-back meetings or tasks. Add 15-30 minute buffers to allow for travel, overruns, and context switching.
7.  **Provide a "Daily Briefing":** At the top of the schedule, provide a 2-3 sentence summary of the day's primary goal and focus.

**Output Format:**
Return the response as a single JSON object inside a ```json fenced block, with the following structure:

```json
{{
  "dailyBriefing": "A short summary of the day's main objective.",
  "dailySchedule": [
    {{
      "time": "09:00 - 11:00",
      "activity": "Deep Work: Finalize Presentation",
      "type": "work",
      "description": "Two hours of uninterrupted focus to complete the presentation. All notifications off."
    }}
  ],
  "recommendations": [
    "A list of strategic recommendations for the day."
  ]
}}
```"""


def build_ceo_prompt(random_plan: str, preferences: UserPreferences | None = None) -> str:
    """Build the executive-assistant prompt from a free-text brain dump."""
    preferences = preferences or UserPreferences()
    return CEO_PROMPT.format(
        random_plan=random_plan,
        energy_level=_value(preferences.energy_level, "not specified"),
        workout_time=_value(preferences.preferred_workout_time, "not specified"),
    )
