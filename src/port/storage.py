"""Port definition for the time tracking store.

A single port covers users, projects and time entries because project
deletion must cascade to time entries in one atomic operation.
"""

from typing import Protocol

from domain.model.project import Project, ProjectInputs
from domain.model.time_entry import TimeEntry, TimeEntryFilter, TimeEntryInputs
from domain.model.user import User, UserInputs


class Storage(Protocol):
    """Protocol defining the interface for time tracking data access."""

    # ── users ────────────────────────────────────────────────

    def get_user(self, user_id: int) -> User | None: ...

    def get_user_by_username(self, username: str) -> User | None: ...

    def create_user(self, inputs: UserInputs) -> User:
        """Create a user with the next id. Ids start at 1 and are never reused.

        Raises:
            DuplicateError: the username is already taken
        """
        ...

    # ── projects ─────────────────────────────────────────────

    def get_project(self, project_id: int) -> Project | None: ...

    def get_all_projects(self) -> list[Project]:
        """Return all projects in insertion order."""
        ...

    def create_project(self, inputs: ProjectInputs) -> Project: ...

    def update_project(self, project_id: int, inputs: ProjectInputs) -> Project | None:
        """Replace every field of a project. Return None if the id is unknown."""
        ...

    def delete_project(self, project_id: int) -> bool:
        """Delete a project and all of its time entries.

        Return False if the id is unknown. Either both the project and its
        entries are removed or neither is.
        """
        ...

    # ── time entries ─────────────────────────────────────────

    def get_time_entry(self, entry_id: int) -> TimeEntry | None: ...

    def get_time_entries(self, entry_filter: TimeEntryFilter) -> list[TimeEntry]:
        """Return entries matching every set filter field, newest date first."""
        ...

    def create_time_entry(self, inputs: TimeEntryInputs) -> TimeEntry: ...

    def update_time_entry(self, entry_id: int, inputs: TimeEntryInputs) -> TimeEntry | None:
        """Replace every field of a time entry. Return None if the id is unknown."""
        ...

    def delete_time_entry(self, entry_id: int) -> bool: ...
