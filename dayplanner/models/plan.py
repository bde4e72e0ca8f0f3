"""
Plan models produced by the planner.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from dayplanner.models.enums import BlockFocusType, BlockType, RiskSeverity
from dayplanner.models.task import Task


class PlanBlock(BaseModel):
    """A span of the day assigned to a task, event or break."""

    id: str
    type: BlockType
    title: str
    start: datetime
    end: datetime
    source_id: Optional[str] = Field(None, description="Originating task/event id")
    focus_type: BlockFocusType = BlockFocusType.LIGHT
    explanations: list[str] = Field(default_factory=list)


class PlanDecision(BaseModel):
    """Audit trail entry for one scheduling action."""

    id: str
    title: str
    rationale: str
    related_block_id: Optional[str] = None


class Risk(BaseModel):
    """Something the plan could not accommodate."""

    id: str
    severity: RiskSeverity
    description: str
    mitigation: Optional[str] = None


class PlanSummary(BaseModel):
    """Aggregated figures of a plan."""

    date: date
    timezone: str
    objectives: list[str]
    total_focus_minutes: int
    total_light_minutes: int = 0
    total_meetings_minutes: int
    total_break_minutes: int = 0
    scheduled_minutes: int = 0
    slack_minutes: int
    risks: list[Risk] = Field(default_factory=list)


class PlanMetadata(BaseModel):
    """Generation stamp."""

    generated_at: datetime
    generator: str
    version: str


class Plan(BaseModel):
    """Full plan for one day."""

    summary: PlanSummary
    blocks: list[PlanBlock]
    decisions: list[PlanDecision]
    unscheduled_tasks: list[Task]
    metadata: PlanMetadata
