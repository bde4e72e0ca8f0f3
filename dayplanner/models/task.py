"""
Task model definitions.

Tasks are the candidate work items the planner places into free time.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from dayplanner.models.enums import FocusType, Priority


class PersonWorkingHours(BaseModel):
    """Working window of a person on one weekday."""

    day: int = Field(..., ge=0, le=6, description="Weekday (0=Sunday)")
    start: str
    end: str


class Person(BaseModel):
    """Someone a task or meeting involves."""

    id: str
    name: str
    email: Optional[str] = None
    working_hours: Optional[list[PersonWorkingHours]] = None
    timezone: Optional[str] = None


class TimeWindow(BaseModel):
    """Start/end pair, either "HH:MM" or a full ISO timestamp."""

    start: str
    end: str


class TaskBase(BaseModel):
    """Task fields shared by stored and newly proposed tasks."""

    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Task details")
    estimated_minutes: int = Field(..., ge=5, description="Estimated effort in minutes")
    due_date: Optional[datetime] = Field(None, description="Deadline")
    priority: Priority = Field(Priority.SHOULD, description="MoSCoW priority")
    score: float = Field(50, ge=0, le=100, description="Fine-grained importance (0-100)")
    tags: list[str] = Field(default_factory=list)
    project: Optional[str] = None
    dependencies: list[str] = Field(
        default_factory=list, description="IDs of tasks that must finish first"
    )
    required_people: list[Person] = Field(default_factory=list)
    preferred_window: Optional[TimeWindow] = None
    allow_fragmentation: bool = False
    focus_type: FocusType = FocusType.DEEP


class Task(TaskBase):
    """Task with a stable identifier."""

    id: str


class NewTask(TaskBase):
    """Task proposed by a what-if scenario; the id is generated when missing."""

    id: Optional[str] = None


@dataclass
class RankedTask:
    """
    Per-pass scheduling state for a task.

    The wrapped Task is never mutated; remaining_minutes is consumed by the
    scheduler during a single pass.
    """

    task: Task
    weight: float
    remaining_minutes: int

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title
