"""
What-if scenario models and plan comparison records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from dayplanner.models.enums import ScenarioType
from dayplanner.models.plan import Plan
from dayplanner.models.task import NewTask


class WhatIfScenario(BaseModel):
    """A single hypothetical mutation of the planner input."""

    type: ScenarioType
    task_id: Optional[str] = None
    increase: Optional[float] = None
    delay_minutes: Optional[int] = None
    new_task: Optional[NewTask] = None


TaskDiffStatus = Literal[
    "unchanged",
    "moved",
    "new",
    "removed",
    "newly_scheduled",
    "newly_unscheduled",
]


class TaskPlanDiff(BaseModel):
    """How one task's placement changed between two plans."""

    task_id: str
    title: str
    status: TaskDiffStatus
    baseline_start: Optional[datetime] = None
    scenario_start: Optional[datetime] = None
    baseline_minutes: int = 0
    scenario_minutes: int = 0


class PlanDiff(BaseModel):
    """Per-task differences plus aggregate deltas."""

    task_diffs: list[TaskPlanDiff] = Field(default_factory=list)
    summary: dict[str, int] = Field(default_factory=dict)


class WhatIfSummary(BaseModel):
    """Human-readable outcome of a scenario."""

    message: str
    impacted_tasks: list[str] = Field(default_factory=list)


class WhatIfResult(BaseModel):
    """Baseline and scenario plans side by side."""

    baseline: Plan
    scenario: Plan
    summary: WhatIfSummary
    diff: PlanDiff = Field(default_factory=PlanDiff)
