"""MongoDB implementation of Storage.

Documents keep integer ids in ``_id``; ids come from a ``counters`` collection
so they start at 1 and are never reused after deletion.
"""

from dataclasses import asdict
from logging import getLogger

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import (
    COUNTERS_COLLECTION_NAME,
    PROJECTS_COLLECTION_NAME,
    TIME_ENTRIES_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
)
from domain.model.errors import DuplicateError, StorageError
from domain.model.project import DEFAULT_PROJECT_COLOR, Project, ProjectInputs
from domain.model.time_entry import TimeEntry, TimeEntryFilter, TimeEntryInputs
from domain.model.user import ROLE_USER, User, UserInputs

logger = getLogger(__name__)


class MongoStorage:
    def __init__(self, db: Database):
        self.client = db.client
        self.users = db[USERS_COLLECTION_NAME]
        self.projects = db[PROJECTS_COLLECTION_NAME]
        self.time_entries = db[TIME_ENTRIES_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for all time tracking collections."""
        try:
            self.users.create_index([('username', ASCENDING)], name='idx_users_username', unique=True)
            self.time_entries.create_index(
                [('user_id', ASCENDING), ('date', DESCENDING)], name='idx_entries_user_date',
            )
            self.time_entries.create_index([('project_id', ASCENDING)], name='idx_entries_project_id')
            return True
        except PyMongoError as e:
            logger.error("Failed to create indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _next_id(self, kind: str) -> int:
        """Atomically increment and return the id counter for an entity kind."""
        doc = self.counters.find_one_and_update(
            {'_id': kind},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return doc['seq']

    def _user_to_domain(self, doc: dict) -> User:
        return User(
            id=doc['_id'],
            username=doc['username'],
            password=doc['password'],
            name=doc['name'],
            email=doc['email'],
            hourly_rate=doc.get('hourly_rate'),
            role=doc.get('role', ROLE_USER),
        )

    def _project_to_domain(self, doc: dict) -> Project:
        return Project(
            id=doc['_id'],
            name=doc['name'],
            description=doc.get('description'),
            client=doc.get('client'),
            color=doc.get('color', DEFAULT_PROJECT_COLOR),
            is_active=doc.get('is_active', True),
        )

    def _entry_to_domain(self, doc: dict) -> TimeEntry:
        return TimeEntry(
            id=doc['_id'],
            project_id=doc['project_id'],
            user_id=doc['user_id'],
            task=doc['task'],
            date=doc['date'],
            duration=doc['duration'],
            notes=doc.get('notes'),
            is_billable=doc.get('is_billable', True),
        )

    @staticmethod
    def _build_entry_query(entry_filter: TimeEntryFilter) -> dict:
        query: dict = {}
        if entry_filter.user_id is not None:
            query['user_id'] = entry_filter.user_id
        if entry_filter.project_id is not None:
            query['project_id'] = entry_filter.project_id

        date_range = {}
        if entry_filter.start_date is not None:
            date_range['$gte'] = entry_filter.start_date
        if entry_filter.end_date is not None:
            date_range['$lte'] = entry_filter.end_date
        if date_range:
            query['date'] = date_range
        return query

    # ── users ────────────────────────────────────────────────

    def get_user(self, user_id: int) -> User | None:
        try:
            doc = self.users.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to get user") from e
        return self._user_to_domain(doc) if doc else None

    def get_user_by_username(self, username: str) -> User | None:
        try:
            doc = self.users.find_one({'username': username})
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            raise StorageError("Failed to get user") from e
        return self._user_to_domain(doc) if doc else None

    def create_user(self, inputs: UserInputs) -> User:
        try:
            user_id = self._next_id(USERS_COLLECTION_NAME)
            self.users.insert_one({'_id': user_id, **asdict(inputs)})
        except DuplicateKeyError as e:
            logger.warning("Username already exists", extra={"username": inputs.username})
            raise DuplicateError(f"Username '{inputs.username}' already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"username": inputs.username, "error": str(e)})
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "username": inputs.username})
        return User.from_inputs(user_id, inputs)

    # ── projects ─────────────────────────────────────────────

    def get_project(self, project_id: int) -> Project | None:
        try:
            doc = self.projects.find_one({'_id': project_id})
        except PyMongoError as e:
            logger.error("Failed to get project", extra={"projectId": project_id, "error": str(e)})
            raise StorageError("Failed to get project") from e
        return self._project_to_domain(doc) if doc else None

    def get_all_projects(self) -> list[Project]:
        try:
            docs = list(self.projects.find().sort('_id', ASCENDING))
        except PyMongoError as e:
            logger.error("Failed to list projects", extra={"error": str(e)})
            raise StorageError("Failed to list projects") from e
        return [self._project_to_domain(doc) for doc in docs]

    def create_project(self, inputs: ProjectInputs) -> Project:
        try:
            project_id = self._next_id(PROJECTS_COLLECTION_NAME)
            self.projects.insert_one({'_id': project_id, **asdict(inputs)})
        except PyMongoError as e:
            logger.error("Failed to create project", extra={"projectName": inputs.name, "error": str(e)})
            raise StorageError("Failed to create project") from e
        return Project.from_inputs(project_id, inputs)

    def update_project(self, project_id: int, inputs: ProjectInputs) -> Project | None:
        try:
            result = self.projects.replace_one({'_id': project_id}, asdict(inputs))
        except PyMongoError as e:
            logger.error("Failed to update project", extra={"projectId": project_id, "error": str(e)})
            raise StorageError("Failed to update project") from e

        if result.matched_count == 0:
            return None
        return Project.from_inputs(project_id, inputs)

    def delete_project(self, project_id: int) -> bool:
        """Delete the project and its time entries in one transaction.

        Transactions require a replica set or sharded cluster.
        """
        try:
            with self.client.start_session() as session:
                with session.start_transaction():
                    result = self.projects.delete_one({'_id': project_id}, session=session)
                    if result.deleted_count == 0:
                        session.abort_transaction()
                        return False
                    cascade = self.time_entries.delete_many({'project_id': project_id}, session=session)
        except PyMongoError as e:
            logger.error("Failed to delete project", extra={"projectId": project_id, "error": str(e)})
            raise StorageError("Failed to delete project") from e

        logger.debug("Cascaded project delete", extra={
            "projectId": project_id,
            "deletedEntries": cascade.deleted_count,
        })
        return True

    # ── time entries ─────────────────────────────────────────

    def get_time_entry(self, entry_id: int) -> TimeEntry | None:
        try:
            doc = self.time_entries.find_one({'_id': entry_id})
        except PyMongoError as e:
            logger.error("Failed to get time entry", extra={"timeEntryId": entry_id, "error": str(e)})
            raise StorageError("Failed to get time entry") from e
        return self._entry_to_domain(doc) if doc else None

    def get_time_entries(self, entry_filter: TimeEntryFilter) -> list[TimeEntry]:
        query = self._build_entry_query(entry_filter)
        try:
            docs = list(
                self.time_entries.find(query)
                .sort([('date', DESCENDING), ('_id', ASCENDING)])
            )
        except PyMongoError as e:
            logger.error("Failed to query time entries", extra={"query": str(query), "error": str(e)})
            raise StorageError("Failed to query time entries") from e
        return [self._entry_to_domain(doc) for doc in docs]

    def create_time_entry(self, inputs: TimeEntryInputs) -> TimeEntry:
        try:
            entry_id = self._next_id(TIME_ENTRIES_COLLECTION_NAME)
            self.time_entries.insert_one({'_id': entry_id, **asdict(inputs)})
        except PyMongoError as e:
            logger.error("Failed to create time entry", extra={"projectId": inputs.project_id, "error": str(e)})
            raise StorageError("Failed to create time entry") from e
        return TimeEntry.from_inputs(entry_id, inputs)

    def update_time_entry(self, entry_id: int, inputs: TimeEntryInputs) -> TimeEntry | None:
        try:
            result = self.time_entries.replace_one({'_id': entry_id}, asdict(inputs))
        except PyMongoError as e:
            logger.error("Failed to update time entry", extra={"timeEntryId": entry_id, "error": str(e)})
            raise StorageError("Failed to update time entry") from e

        if result.matched_count == 0:
            return None
        return TimeEntry.from_inputs(entry_id, inputs)

    def delete_time_entry(self, entry_id: int) -> bool:
        try:
            result = self.time_entries.delete_one({'_id': entry_id})
        except PyMongoError as e:
            logger.error("Failed to delete time entry", extra={"timeEntryId": entry_id, "error": str(e)})
            raise StorageError("Failed to delete time entry") from e
        return result.deleted_count > 0
