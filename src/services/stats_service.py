"""Stats service: dashboard aggregation over a user's time entries.

Pure read-only computation: entries come from the storage port, projects
and the user are looked up to enrich the result, nothing is written.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from domain.model.stats import WEEKDAY_LABELS, DailyActivity, ProjectStats, Stats
from domain.model.time_entry import TimeEntry, TimeEntryFilter
from domain.model.user import DEFAULT_HOURLY_RATE
from port.storage import Storage

MINUTES_PER_HOUR = 60


def start_of_week(now: datetime) -> datetime:
    """Return the most recent Monday 00:00 at or before ``now``, keeping its tzinfo."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=midnight.weekday())


def _round(value: float, places: int) -> float:
    """Round half away from zero, so 0.25 -> 0.3 rather than round()'s 0.2."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _percentage(part: float, whole: float) -> float:
    """part / whole as a percentage, defined as 0 when whole is 0."""
    if whole <= 0:
        return 0
    return part / whole * 100


def _project_breakdown(storage: Storage, entries: list[TimeEntry], total_minutes: int) -> list[ProjectStats]:
    minutes_by_project: dict[int, int] = {}
    for entry in entries:
        minutes_by_project[entry.project_id] = minutes_by_project.get(entry.project_id, 0) + entry.duration

    breakdown = []
    for project_id, minutes in minutes_by_project.items():
        project = storage.get_project(project_id)
        if project is None:
            continue
        breakdown.append(ProjectStats(
            id=project_id,
            name=project.name,
            color=project.color,
            hours=minutes / MINUTES_PER_HOUR,
            percentage=_percentage(minutes, total_minutes),
        ))

    breakdown.sort(key=lambda p: p.hours, reverse=True)
    return breakdown


def _daily_activity(entries: list[TimeEntry]) -> list[DailyActivity]:
    hours_by_day = [0.0] * len(WEEKDAY_LABELS)
    for entry in entries:
        # weekday() is 0 for Monday, matching WEEKDAY_LABELS
        hours_by_day[entry.date.weekday()] += entry.duration / MINUTES_PER_HOUR

    return [DailyActivity(day=day, hours=hours) for day, hours in zip(WEEKDAY_LABELS, hours_by_day)]


def get_stats(storage: Storage, user_id: int, start_date: datetime, end_date: datetime) -> Stats:
    """Aggregate a user's time entries between two inclusive dates.

    Args:
        storage: Store to read entries, projects and the user from
        user_id: User whose entries are aggregated
        start_date: Inclusive lower bound on entry date
        end_date: Inclusive upper bound on entry date

    Returns:
        Stats with hours and utilization rounded to 1 decimal, billable amount
        rounded to 2 decimals, a project breakdown sorted by hours descending
        and exactly seven Mon..Sun daily buckets.
    """
    entries = storage.get_time_entries(TimeEntryFilter(
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    ))

    total_minutes = sum(e.duration for e in entries)
    billable_minutes = sum(e.duration for e in entries if e.is_billable)

    weekly_hours = total_minutes / MINUTES_PER_HOUR
    billable_hours = billable_minutes / MINUTES_PER_HOUR

    user = storage.get_user(user_id)
    hourly_rate = user.effective_hourly_rate if user else DEFAULT_HOURLY_RATE
    billable_amount = billable_hours * hourly_rate

    utilization_rate = _percentage(billable_minutes, total_minutes)

    return Stats(
        weekly_hours=_round(weekly_hours, 1),
        billable_hours=_round(billable_hours, 1),
        billable_amount=_round(billable_amount, 2),
        utilization_rate=_round(utilization_rate, 1),
        project_breakdown=_project_breakdown(storage, entries, total_minutes),
        daily_activity=_daily_activity(entries),
    )
