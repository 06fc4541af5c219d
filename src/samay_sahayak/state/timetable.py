"""Last generated timetable state."""

from ..models.timetable import TimetableData


class TimetableStore:
    def __init__(self):
        self.timetable: TimetableData | None = None
        self.is_loading = False
        self.error: str | None = None

    def set(self, timetable: TimetableData) -> None:
        self.timetable = timetable
        self.error = None

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def set_error(self, error: str) -> None:
        self.error = error
        self.is_loading = False

    def clear(self) -> None:
        self.timetable = None
        self.error = None
