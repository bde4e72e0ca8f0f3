"""Pydantic models (schemas) for the planner."""

from dayplanner.models.enums import (
    BlockFocusType,
    BlockType,
    ConstraintType,
    CreatedFrom,
    EventCategory,
    EventFlexibility,
    EventSource,
    FocusType,
    Priority,
    RiskSeverity,
    ScenarioType,
)
from dayplanner.models.task import NewTask, Person, RankedTask, Task, TimeWindow
from dayplanner.models.event import EmailAction, Event, MeetingInfo
from dayplanner.models.planner_input import (
    Constraint,
    PlannerInput,
    PlannerOptions,
    Preferences,
    WorkingWindow,
)
from dayplanner.models.plan import Plan, PlanBlock, PlanDecision, PlanMetadata, PlanSummary, Risk
from dayplanner.models.what_if import (
    PlanDiff,
    TaskPlanDiff,
    WhatIfResult,
    WhatIfScenario,
    WhatIfSummary,
)

__all__ = [
    # Enums
    "BlockFocusType",
    "BlockType",
    "ConstraintType",
    "CreatedFrom",
    "EventCategory",
    "EventFlexibility",
    "EventSource",
    "FocusType",
    "Priority",
    "RiskSeverity",
    "ScenarioType",
    # Task
    "NewTask",
    "Person",
    "RankedTask",
    "Task",
    "TimeWindow",
    # Event
    "EmailAction",
    "Event",
    "MeetingInfo",
    # Input
    "Constraint",
    "PlannerInput",
    "PlannerOptions",
    "Preferences",
    "WorkingWindow",
    # Plan
    "Plan",
    "PlanBlock",
    "PlanDecision",
    "PlanMetadata",
    "PlanSummary",
    "Risk",
    # What-if
    "PlanDiff",
    "TaskPlanDiff",
    "WhatIfResult",
    "WhatIfScenario",
    "WhatIfSummary",
]
