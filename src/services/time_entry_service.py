"""Time entry service: reference checks around time entry writes.

A time entry must point at an existing project and an existing user.
"""

from domain.model.errors import ValidationError
from domain.model.time_entry import TimeEntry, TimeEntryInputs
from port.storage import Storage


def _check_references(storage: Storage, inputs: TimeEntryInputs) -> None:
    if storage.get_project(inputs.project_id) is None:
        raise ValidationError(f"Project {inputs.project_id} does not exist")
    if storage.get_user(inputs.user_id) is None:
        raise ValidationError(f"User {inputs.user_id} does not exist")


def create_time_entry(storage: Storage, inputs: TimeEntryInputs) -> TimeEntry:
    """Create a time entry.

    Raises:
        ValidationError: project or user does not exist
    """
    _check_references(storage, inputs)
    return storage.create_time_entry(inputs)


def update_time_entry(storage: Storage, entry_id: int, inputs: TimeEntryInputs) -> TimeEntry | None:
    """Replace a time entry. Return None if the entry does not exist.

    Raises:
        ValidationError: project or user does not exist
    """
    if storage.get_time_entry(entry_id) is None:
        return None
    _check_references(storage, inputs)
    return storage.update_time_entry(entry_id, inputs)
