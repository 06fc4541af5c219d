"""Task list state."""

from dataclasses import replace

from ..models.task import DEFAULT_CATEGORIES, Priority, Task


class TaskStore:
    """The tasks being planned plus the known category set."""

    def __init__(self):
        self.tasks: list[Task] = []
        self.categories: list[str] = list(DEFAULT_CATEGORIES)

    def add(
        self,
        title: str,
        estimated_duration: int,
        priority: Priority | str = Priority.MEDIUM,
        category: str = "Other",
        description: str = "",
    ) -> Task:
        """Create a task with a fresh id and append it."""
        task = Task(
            title=title,
            estimated_duration=estimated_duration,
            priority=priority,
            category=category,
            description=description,
        )
        self.tasks.append(task)
        return task

    def remove(self, task_id: str) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def update(self, task_id: str, **updates) -> Task | None:
        """Replace fields on the task with that id; unknown ids are ignored."""
        updates.pop("id", None)
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[index] = replace(task, **updates)
                return self.tasks[index]
        return None

    def add_category(self, category: str) -> None:
        if category not in self.categories:
            self.categories.append(category)

    def clear(self) -> None:
        self.tasks = []
