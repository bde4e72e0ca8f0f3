"""
Planner input and option models.

These are the boundary records callers hand to plan_day.
"""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

from dayplanner.core.config import get_settings
from dayplanner.models.enums import ConstraintType
from dayplanner.models.event import EmailAction, Event
from dayplanner.models.task import Task, TimeWindow
from dayplanner.utils.datetime_utils import (
    ensure_timezone,
    parse_iso_datetime,
    parse_time_of_day,
    resolve_day_boundary,
    to_utc,
)


def _validate_timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {value}") from exc
    return value


class WorkingWindow(TimeWindow):
    """Working-hours or focus window; boundaries must be parseable."""

    @field_validator("start", "end")
    @classmethod
    def validate_boundary(cls, value: str) -> str:
        if "T" in value:
            parse_iso_datetime(value, "UTC")
        elif parse_time_of_day(value) is None:
            raise ValueError(f"Expected HH:MM or an ISO timestamp, got {value!r}")
        return value

    @model_validator(mode="after")
    def validate_order(self):
        """Time-of-day windows must end after they start."""
        start = parse_time_of_day(self.start) if "T" not in self.start else None
        end = parse_time_of_day(self.end) if "T" not in self.end else None
        if start is not None and end is not None and end <= start:
            raise ValueError(f"Window {self.start}-{self.end} must end after it starts")
        return self


class Preferences(BaseModel):
    """Scheduling preferences for the planned day."""

    working_hours: list[WorkingWindow]
    focus_blocks: list[WorkingWindow] = Field(default_factory=list)
    meeting_free_days: list[int] = Field(default_factory=list)
    timezone: str = "Europe/Rome"
    minimum_break_minutes: int = Field(15, ge=0)
    transition_buffer_minutes: int = Field(5, ge=0)
    default_meeting_duration_minutes: int = Field(30, ge=5)

    @field_validator("meeting_free_days")
    @classmethod
    def validate_meeting_free_days(cls, value: list[int]) -> list[int]:
        for day in value:
            if day < 0 or day > 6:
                raise ValueError("meeting_free_days entries must be between 0 and 6")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        return _validate_timezone(value)


class Constraint(BaseModel):
    """Hard or soft scheduling constraint (carried, not interpreted)."""

    id: str
    type: ConstraintType
    description: str
    condition: str
    priority: int = Field(3, ge=1, le=5)


class PlannerInput(BaseModel):
    """Everything needed to plan one day."""

    date: date
    timezone: str
    tasks: list[Task]
    events: list[Event]
    constraints: list[Constraint]
    preferences: Preferences
    email_actions: list[EmailAction] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        return _validate_timezone(value)

    @model_validator(mode="after")
    def normalize(self):
        """Reject duplicate task ids and inverted windows, localize naive timestamps."""
        seen: set[str] = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)

        for field_name in ("working_hours", "focus_blocks"):
            for window in getattr(self.preferences, field_name):
                start = resolve_day_boundary(self.date, window.start, self.timezone)
                end = resolve_day_boundary(self.date, window.end, self.timezone)
                if end <= start:
                    raise ValueError(
                        f"{field_name} window {window.start}-{window.end} must end after it starts"
                    )

        for task in self.tasks:
            task.due_date = ensure_timezone(task.due_date, self.timezone)
        for event in self.events:
            event.start = ensure_timezone(event.start, self.timezone)
            event.end = ensure_timezone(event.end, self.timezone)
            if to_utc(event.end) <= to_utc(event.start):
                raise ValueError(f"Event {event.id} must end after it starts")
        for action in self.email_actions:
            action.due_date = ensure_timezone(action.due_date, self.timezone)
            for task in action.extracted_tasks:
                task.due_date = ensure_timezone(task.due_date, self.timezone)
        return self


class PlannerOptions(BaseModel):
    """Knobs controlling one planning run."""

    allow_task_splitting: bool = True
    protect_deep_work: bool = True
    prefer_morning_focus: bool = True
    buffer_before_meetings: int = Field(10, ge=0)
    reference_time: Optional[datetime] = Field(
        None, description="Instant urgency is measured from (defaults to now)"
    )
    reject_dependency_cycles: bool = Field(
        default_factory=lambda: get_settings().REJECT_DEPENDENCY_CYCLES
    )
    include_email_tasks: bool = False
