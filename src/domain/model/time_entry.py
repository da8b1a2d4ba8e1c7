"""Time entry domain model and the filter used to query entries."""

from dataclasses import dataclass
from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class TimeEntryInputs:
    """All time entry fields except the id. Used for create and full-replace update."""
    project_id: int
    user_id: int
    task: str
    date: datetime
    duration: int
    notes: str | None = None
    is_billable: bool = True


@dataclass
class TimeEntry:
    """Domain model representing time spent on a task, in whole minutes."""
    id: int
    project_id: int
    user_id: int
    task: str
    date: datetime
    duration: int
    notes: str | None = None
    is_billable: bool = True

    @classmethod
    def from_inputs(cls, entry_id: int, inputs: TimeEntryInputs) -> 'TimeEntry':
        return cls(
            id=entry_id,
            project_id=inputs.project_id,
            user_id=inputs.user_id,
            task=inputs.task,
            date=inputs.date,
            duration=inputs.duration,
            notes=inputs.notes,
            is_billable=inputs.is_billable,
        )


@dataclass(frozen=True)
class TimeEntryFilter:
    """Conjunction of optional constraints. Unset fields match everything.

    Both date bounds are inclusive.
    """
    user_id: int | None = None
    project_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    def matches(self, entry: TimeEntry) -> bool:
        if self.user_id is not None and entry.user_id != self.user_id:
            return False
        if self.project_id is not None and entry.project_id != self.project_id:
            return False
        if self.start_date is not None and as_utc(entry.date) < as_utc(self.start_date):
            return False
        if self.end_date is not None and as_utc(entry.date) > as_utc(self.end_date):
            return False
        return True
