"""Sample data for the demo deployment.

Each collection is seeded only when it is empty, so running this on every
startup is safe.
"""

import logging
from datetime import datetime, timedelta, timezone

from domain.model.errors import DomainError
from domain.model.project import Project, ProjectInputs
from domain.model.time_entry import TimeEntryFilter, TimeEntryInputs
from domain.model.user import ROLE_ADMIN, User, UserInputs
from port.storage import Storage
from services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEMO_USER_ID = 1

DEMO_PROJECTS = [
    ProjectInputs(
        name="Website Redesign",
        description="Complete redesign of corporate website",
        client="Acme Corp",
        color="#10b981",
    ),
    ProjectInputs(
        name="Mobile App Development",
        description="iOS and Android app development",
        client="TechStart",
        color="#3b82f6",
    ),
    ProjectInputs(
        name="SEO Optimization",
        description="Search engine optimization campaign",
        client="GrowthX",
        color="#8b5cf6",
    ),
    ProjectInputs(
        name="Content Creation",
        description="Blog and social media content",
        client="MediaPulse",
        color="#f59e0b",
    ),
]

# (days ago, index into the seeded projects, task, minutes, notes)
DEMO_TIME_ENTRIES = [
    (0, 0, "Frontend Development", 135, "Working on responsive design"),
    (0, 1, "API Integration", 105, "Connecting to payment API"),
    (1, 2, "Keyword Research", 190, "Analyzing competitor keywords"),
    (2, 0, "UI Components", 240, "Building reusable UI components"),
    (3, 1, "Bug Fixing", 300, "Resolving critical bugs"),
]


def _seed_user(storage: Storage) -> User:
    user = storage.get_user(DEMO_USER_ID)
    if user:
        return user
    user = storage.create_user(UserInputs(
        username="demo",
        password=hash_password("password"),
        name="Alex Johnson",
        email="alex@electricmind.co",
        hourly_rate=150,
        role=ROLE_ADMIN,
    ))
    logger.info("Seeded demo user", extra={"userId": user.id})
    return user


def _seed_projects(storage: Storage) -> list[Project]:
    """Return the projects demo entries may point at, creating the demo set if there are none."""
    projects = storage.get_all_projects()
    if projects:
        return projects
    projects = [storage.create_project(inputs) for inputs in DEMO_PROJECTS]
    logger.info("Seeded demo projects", extra={"count": len(projects)})
    return projects


def _seed_time_entries(storage: Storage, user: User, projects: list[Project], now: datetime) -> None:
    if storage.get_time_entries(TimeEntryFilter()):
        return

    created = 0
    for days_ago, project_index, task, duration, notes in DEMO_TIME_ENTRIES:
        # A store with fewer projects than the demo set gets fewer entries
        if project_index >= len(projects):
            continue
        storage.create_time_entry(TimeEntryInputs(
            project_id=projects[project_index].id,
            user_id=user.id,
            task=task,
            date=now - timedelta(days=days_ago),
            duration=duration,
            notes=notes,
        ))
        created += 1
    logger.info("Seeded demo time entries", extra={"count": created})


def initialize_sample_data(storage: Storage, now: datetime | None = None) -> bool:
    """Populate an empty store with a demo user, projects and time entries.

    Returns True if seeding completed. Failures are logged, not raised,
    so a broken seed never blocks startup.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    try:
        user = _seed_user(storage)
        projects = _seed_projects(storage)
        _seed_time_entries(storage, user, projects, now)
        return True
    except DomainError as e:
        logger.error("Failed to initialize sample data", extra={"error": str(e)})
        return False
