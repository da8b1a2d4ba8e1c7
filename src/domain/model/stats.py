"""Derived dashboard statistics. Never persisted, always recomputed."""

from dataclasses import dataclass, field

WEEKDAY_LABELS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


@dataclass(frozen=True)
class ProjectStats:
    """Share of tracked time spent on one project."""
    id: int
    name: str
    color: str
    hours: float
    percentage: float


@dataclass(frozen=True)
class DailyActivity:
    """Hours tracked on one weekday across the requested range."""
    day: str
    hours: float


@dataclass
class Stats:
    weekly_hours: float
    billable_hours: float
    billable_amount: float
    utilization_rate: float
    project_breakdown: list[ProjectStats] = field(default_factory=list)
    daily_activity: list[DailyActivity] = field(default_factory=list)
