"""
Plan summary aggregation and final plan assembly.
"""

from uuid import uuid4

from dayplanner.core.config import get_settings
from dayplanner.models.enums import BlockFocusType, BlockType, Priority, RiskSeverity
from dayplanner.models.plan import Plan, PlanBlock, PlanDecision, PlanMetadata, PlanSummary, Risk
from dayplanner.models.planner_input import PlannerInput, PlannerOptions
from dayplanner.models.task import RankedTask
from dayplanner.utils.datetime_utils import duration_minutes, now_utc, to_utc

OBJECTIVE_COUNT = 3

RISK_SEVERITY: dict[Priority, RiskSeverity] = {
    Priority.MUST: RiskSeverity.HIGH,
    Priority.SHOULD: RiskSeverity.MEDIUM,
}


def _build_risk(task: RankedTask) -> Risk:
    due_date = task.task.due_date
    return Risk(
        id=str(uuid4()),
        severity=RISK_SEVERITY.get(task.task.priority, RiskSeverity.LOW),
        description=(
            f'Task "{task.title}" was not scheduled '
            f"({task.remaining_minutes} minutes remaining)."
        ),
        mitigation=(
            "Consider moving events or extending working hours to meet the "
            f"deadline {due_date.isoformat()}."
            if due_date
            else None
        ),
    )


def build_plan_summary(
    planner_input: PlannerInput,
    blocks: list[PlanBlock],
    ranked_tasks: list[RankedTask],
    remaining: list[RankedTask],
    decisions: list[PlanDecision],
    options: PlannerOptions,
) -> Plan:
    """
    Aggregate blocks into totals, objectives, slack and risks.

    Args:
        planner_input: Validated day input
        blocks: Task, event and break blocks (any order)
        ranked_tasks: Tasks in ranking order (objectives come from here)
        remaining: Tasks left with unscheduled minutes
        decisions: Scheduler audit trail
        options: Options the plan was computed with

    Returns:
        Assembled Plan
    """
    settings = get_settings()
    sorted_blocks = sorted(blocks, key=lambda block: to_utc(block.start))
    objectives = [task.title for task in ranked_tasks[:OBJECTIVE_COUNT]]

    totals = {"focus": 0, "light": 0, "meetings": 0, "breaks": 0}
    scheduled_minutes = 0
    for block in sorted_blocks:
        minutes = duration_minutes(block.start, block.end)
        scheduled_minutes += minutes
        if block.type == BlockType.TASK:
            if block.focus_type == BlockFocusType.DEEP:
                totals["focus"] += minutes
            else:
                totals["light"] += minutes
        elif block.type == BlockType.EVENT:
            totals["meetings"] += minutes
        elif block.type == BlockType.BREAK:
            totals["breaks"] += minutes

    span_minutes = 0
    if sorted_blocks:
        span_minutes = duration_minutes(sorted_blocks[0].start, sorted_blocks[-1].end)

    summary = PlanSummary(
        date=planner_input.date,
        timezone=planner_input.timezone,
        objectives=objectives,
        total_focus_minutes=totals["focus"],
        total_light_minutes=totals["light"],
        total_meetings_minutes=totals["meetings"],
        total_break_minutes=totals["breaks"],
        scheduled_minutes=scheduled_minutes,
        slack_minutes=max(0, span_minutes - scheduled_minutes),
        risks=[_build_risk(task) for task in remaining],
    )

    return Plan(
        summary=summary,
        blocks=sorted_blocks,
        decisions=decisions,
        unscheduled_tasks=[task.task.model_copy(deep=True) for task in remaining],
        metadata=PlanMetadata(
            generated_at=now_utc(),
            generator=settings.PLANNER_GENERATOR,
            version=settings.PLANNER_VERSION,
        ),
    )
