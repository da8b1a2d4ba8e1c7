"""Pydantic models for API request/response.

Wire format uses camelCase keys; snake_case field names are accepted on input too.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.project import DEFAULT_PROJECT_COLOR, ProjectInputs
from domain.model.time_entry import TimeEntryInputs


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── projects ─────────────────────────────────────────────────


class ProjectRequest(CamelModel):
    """Request model for creating or fully replacing a project."""
    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: Optional[str] = Field(None, description="Free-form description")
    client: Optional[str] = Field(None, description="Client the project is billed to")
    color: str = Field(
        DEFAULT_PROJECT_COLOR,
        pattern=r'^#(?:[0-9a-fA-F]{3}){1,2}$',
        description="Display color as a hex string",
    )
    is_active: bool = Field(True, description="Whether time can still be tracked against it")

    def to_inputs(self) -> ProjectInputs:
        return ProjectInputs(
            name=self.name,
            description=self.description,
            client=self.client,
            color=self.color,
            is_active=self.is_active,
        )


class ProjectResponse(CamelModel):
    """Response model for project."""
    id: int = Field(..., description="Project ID")
    name: str
    description: Optional[str] = None
    client: Optional[str] = None
    color: str
    is_active: bool


# ── time entries ─────────────────────────────────────────────


class TimeEntryRequest(CamelModel):
    """Request model for creating or fully replacing a time entry."""
    project_id: int = Field(..., description="Project the time was spent on")
    user_id: int = Field(..., description="User who spent the time")
    task: str = Field(..., min_length=1, max_length=500, description="Task description")
    date: datetime = Field(..., description="When the work happened")
    duration: int = Field(..., ge=0, description="Duration in whole minutes")
    notes: Optional[str] = Field(None, description="Optional notes")
    is_billable: bool = Field(True, description="Counts toward billable hours")

    def to_inputs(self) -> TimeEntryInputs:
        return TimeEntryInputs(
            project_id=self.project_id,
            user_id=self.user_id,
            task=self.task,
            date=self.date,
            duration=self.duration,
            notes=self.notes,
            is_billable=self.is_billable,
        )


class TimeEntryResponse(CamelModel):
    """Response model for time entry."""
    id: int = Field(..., description="Time entry ID")
    project_id: int
    user_id: int
    task: str
    date: datetime
    duration: int = Field(..., description="Duration in whole minutes")
    notes: Optional[str] = None
    is_billable: bool


class SuccessResponse(BaseModel):
    success: bool


# ── stats ────────────────────────────────────────────────────


class ProjectStatsResponse(CamelModel):
    id: int
    name: str
    color: str
    hours: float
    percentage: float = Field(..., description="Share of total tracked time, 0-100")


class DailyActivityResponse(CamelModel):
    day: str = Field(..., description="Weekday label, Mon..Sun")
    hours: float


class StatsResponse(CamelModel):
    """Response model for dashboard statistics."""
    weekly_hours: float
    billable_hours: float
    billable_amount: float
    utilization_rate: float = Field(..., description="Billable share of tracked time, 0-100")
    project_breakdown: list[ProjectStatsResponse]
    daily_activity: list[DailyActivityResponse]


# ── users / auth ─────────────────────────────────────────────


class UserResponse(CamelModel):
    """User without the password field."""
    id: int
    username: str
    name: str
    email: str
    hourly_rate: Optional[int] = None
    role: str


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
