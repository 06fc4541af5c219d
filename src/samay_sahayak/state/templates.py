"""Timetable template presets state."""

from ..models.templates import TimetableTemplate, default_templates


class TemplateStore:
    """Preset bundles the user can pick from or extend."""

    def __init__(self, templates: list[TimetableTemplate] | None = None):
        self.templates: list[TimetableTemplate] = (
            list(templates) if templates is not None else default_templates()
        )
        self.selected_template: TimetableTemplate | None = None
        self.is_loading = False
        self.error: str | None = None

    def add(self, template: TimetableTemplate) -> None:
        self.templates.append(template)

    def update(self, template_id: str, **updates) -> TimetableTemplate | None:
        """Replace fields on one template; unknown ids are ignored."""
        updates.pop("id", None)
        for index, template in enumerate(self.templates):
            if template.id == template_id:
                self.templates[index] = template.with_updates(**updates)
                return self.templates[index]
        return None

    def delete(self, template_id: str) -> None:
        self.templates = [t for t in self.templates if t.id != template_id]

    def select(self, template: TimetableTemplate | None) -> None:
        self.selected_template = template

    def load(self, template_id: str) -> TimetableTemplate | None:
        """Select a template by id; an unknown id clears the selection."""
        self.selected_template = next(
            (t for t in self.templates if t.id == template_id), None
        )
        return self.selected_template

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def set_error(self, error: str | None) -> None:
        self.error = error
