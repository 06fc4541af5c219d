"""Technique selection and session configuration state."""

from ..models.technique import TECHNIQUES, SessionConfig, Technique


class TechniqueStore:
    """Selected technique and the session config seeded from it."""

    def __init__(self, techniques: list[Technique] | None = None):
        self.techniques: list[Technique] = list(techniques or TECHNIQUES)
        self.selected_technique: str | None = None
        self.session_config: SessionConfig | None = None

    @property
    def technique(self) -> Technique | None:
        """The selected catalog entry, if the selection names one."""
        for technique in self.techniques:
            if technique.id == self.selected_technique:
                return technique
        return None

    def select(self, technique_id: str) -> None:
        """Select a technique and reset the session config to its defaults.

        An id missing from the catalog is still recorded as selected, but
        leaves the session config as it was.
        """
        self.selected_technique = technique_id
        technique = self.technique
        if technique is not None:
            self.session_config = SessionConfig.for_technique(technique)

    def update_session_config(self, **updates) -> None:
        """Patch the session config; does nothing until a technique is selected."""
        if self.session_config is not None:
            self.session_config = self.session_config.patch(**updates)

    def reset(self) -> None:
        self.selected_technique = None
        self.session_config = None
