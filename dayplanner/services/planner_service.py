"""
Planner service: the day-planning pipeline and its boundary.

plan_day validates its input, then runs
timeline -> prioritizer -> scheduler -> breaks -> summary.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from dayplanner.core.exceptions import NotFoundError
from dayplanner.core.logger import setup_logger
from dayplanner.models.plan import Plan
from dayplanner.models.planner_input import PlannerInput, PlannerOptions
from dayplanner.models.task import Task
from dayplanner.services.day_timeline import DayTimeline, build_break_blocks
from dayplanner.services.plan_summary import build_plan_summary
from dayplanner.services.scheduler_service import TaskScheduler
from dayplanner.services.task_prioritizer import rank_tasks
from dayplanner.utils.datetime_utils import ensure_timezone
from dayplanner.utils.dependency_validator import DependencyValidator
from dayplanner.utils.validators import parse_plan, parse_planner_input, parse_planner_options

logger = setup_logger(__name__)

PlannerInputLike = Union[PlannerInput, dict[str, Any]]
PlannerOptionsLike = Union[PlannerOptions, dict[str, Any], None]


def _collect_tasks(planner_input: PlannerInput, options: PlannerOptions) -> list[Task]:
    tasks = list(planner_input.tasks)
    if not options.include_email_tasks:
        return tasks
    known_ids = {task.id for task in tasks}
    for action in planner_input.email_actions:
        for task in action.extracted_tasks:
            if task.id in known_ids:
                continue
            known_ids.add(task.id)
            tasks.append(task)
    return tasks


def plan_day(raw_input: PlannerInputLike, raw_options: PlannerOptionsLike = None) -> Plan:
    """
    Compute a time-blocked plan for one day.

    Args:
        raw_input: Planner input (model or plain dict)
        raw_options: Planner options (model, dict or None for defaults)

    Returns:
        Plan. Tasks that did not fit are reported as unscheduled with risks.

    Raises:
        ValidationError: If input or options break their contract
        DependencyCycleError: If dependencies form a cycle and cycles are rejected
    """
    planner_input = parse_planner_input(raw_input)
    options = parse_planner_options(raw_options)
    reference_time = ensure_timezone(options.reference_time, planner_input.timezone)

    tasks = _collect_tasks(planner_input, options)
    validator = DependencyValidator()
    if options.reject_dependency_cycles:
        validator.validate(tasks)
    else:
        cycles = validator.find_cycles(tasks)
        if cycles:
            logger.warning(f"Dependency cycles left unresolved: {cycles}")

    timeline = DayTimeline(planner_input, options)
    free_intervals = timeline.get_available_intervals()
    ranked = rank_tasks(tasks, reference_time)

    result = TaskScheduler(options).schedule(ranked, free_intervals)

    event_blocks = timeline.get_existing_event_blocks()
    placed_blocks = result.blocks + event_blocks
    break_blocks = build_break_blocks(
        placed_blocks, planner_input.preferences.minimum_break_minutes
    )

    plan = build_plan_summary(
        planner_input=planner_input,
        blocks=placed_blocks + break_blocks,
        ranked_tasks=ranked,
        remaining=result.remaining,
        decisions=result.decisions,
        options=options,
    )
    logger.info(
        f"Planned {planner_input.date}: {len(tasks)} tasks, {len(free_intervals)} free intervals, "
        f"{len(plan.blocks)} blocks, {len(plan.unscheduled_tasks)} unscheduled"
    )
    return plan


def merge_planner_input(
    base: PlannerInputLike,
    overrides: Optional[dict[str, Any]] = None,
) -> PlannerInput:
    """
    Override top-level input fields; preferences are merged key by key.

    Raises:
        ValidationError: If the merged input is invalid
    """
    base_input = parse_planner_input(base)
    if not overrides:
        return base_input

    merged = base_input.model_dump()
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "preferences":
            preferences = value.model_dump(exclude_unset=True) if hasattr(value, "model_dump") else value
            merged["preferences"] = {**merged["preferences"], **preferences}
        elif isinstance(value, list):
            merged[key] = [item.model_dump() if hasattr(item, "model_dump") else item for item in value]
        else:
            merged[key] = value
    return parse_planner_input(merged)


def explain_block(plan: Union[Plan, dict[str, Any]], block_id: str) -> list[str]:
    """
    Explain why a block is where it is.

    Returns:
        The block's explanations followed by rationales of related decisions

    Raises:
        NotFoundError: If the plan has no block with this id
    """
    validated = parse_plan(plan)
    block = next((item for item in validated.blocks if item.id == block_id), None)
    if block is None:
        raise NotFoundError(f"Block {block_id} not found in plan")
    rationales = [
        decision.rationale
        for decision in validated.decisions
        if decision.related_block_id == block_id
    ]
    return list(block.explanations) + rationales
