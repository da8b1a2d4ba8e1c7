"""In-memory implementation of Storage.

Default backend for the demo deployment and the store used in tests.
"""

import threading
from logging import getLogger

from domain.model.errors import DuplicateError
from domain.model.project import Project, ProjectInputs
from domain.model.time_entry import TimeEntry, TimeEntryFilter, TimeEntryInputs, as_utc
from domain.model.user import User, UserInputs

logger = getLogger(__name__)


class InMemoryStorage:
    def __init__(self):
        self.users: dict[int, User] = {}
        self.projects: dict[int, Project] = {}
        self.time_entries: dict[int, TimeEntry] = {}
        self._user_id_counter = 1
        self._project_id_counter = 1
        self._time_entry_id_counter = 1
        # Public operations run one at a time so a cascade is never seen half-applied.
        self._lock = threading.RLock()

    # ── users ────────────────────────────────────────────────

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            for user in self.users.values():
                if user.username == username:
                    return user
            return None

    def create_user(self, inputs: UserInputs) -> User:
        with self._lock:
            if any(u.username == inputs.username for u in self.users.values()):
                raise DuplicateError(f"Username '{inputs.username}' already exists")

            user_id = self._user_id_counter
            self._user_id_counter += 1

            user = User.from_inputs(user_id, inputs)
            self.users[user_id] = user
            return user

    # ── projects ─────────────────────────────────────────────

    def get_project(self, project_id: int) -> Project | None:
        with self._lock:
            return self.projects.get(project_id)

    def get_all_projects(self) -> list[Project]:
        with self._lock:
            return list(self.projects.values())

    def create_project(self, inputs: ProjectInputs) -> Project:
        with self._lock:
            project_id = self._project_id_counter
            self._project_id_counter += 1

            project = Project.from_inputs(project_id, inputs)
            self.projects[project_id] = project
            return project

    def update_project(self, project_id: int, inputs: ProjectInputs) -> Project | None:
        with self._lock:
            if project_id not in self.projects:
                return None

            project = Project.from_inputs(project_id, inputs)
            self.projects[project_id] = project
            return project

    def delete_project(self, project_id: int) -> bool:
        with self._lock:
            if project_id not in self.projects:
                return False

            del self.projects[project_id]
            orphaned = [
                entry_id for entry_id, entry in self.time_entries.items()
                if entry.project_id == project_id
            ]
            for entry_id in orphaned:
                del self.time_entries[entry_id]

            logger.debug("Cascaded project delete", extra={
                "projectId": project_id,
                "deletedEntries": len(orphaned),
            })
            return True

    # ── time entries ─────────────────────────────────────────

    def get_time_entry(self, entry_id: int) -> TimeEntry | None:
        with self._lock:
            return self.time_entries.get(entry_id)

    def get_time_entries(self, entry_filter: TimeEntryFilter) -> list[TimeEntry]:
        with self._lock:
            results = [e for e in self.time_entries.values() if entry_filter.matches(e)]

        results.sort(key=lambda e: as_utc(e.date), reverse=True)
        return results

    def create_time_entry(self, inputs: TimeEntryInputs) -> TimeEntry:
        with self._lock:
            entry_id = self._time_entry_id_counter
            self._time_entry_id_counter += 1

            entry = TimeEntry.from_inputs(entry_id, inputs)
            self.time_entries[entry_id] = entry
            return entry

    def update_time_entry(self, entry_id: int, inputs: TimeEntryInputs) -> TimeEntry | None:
        with self._lock:
            if entry_id not in self.time_entries:
                return None

            entry = TimeEntry.from_inputs(entry_id, inputs)
            self.time_entries[entry_id] = entry
            return entry

    def delete_time_entry(self, entry_id: int) -> bool:
        with self._lock:
            if entry_id not in self.time_entries:
                return False

            del self.time_entries[entry_id]
            return True
