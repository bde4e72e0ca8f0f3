"""
What-if service: replay the planner on a mutated copy of the input.

The baseline plan is trusted as given; only the scenario plan is computed.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union
from uuid import uuid4

from dayplanner.core.logger import setup_logger
from dayplanner.models.enums import Priority, ScenarioType
from dayplanner.models.plan import Plan
from dayplanner.models.planner_input import PlannerInput
from dayplanner.models.task import Task
from dayplanner.models.what_if import WhatIfResult, WhatIfScenario, WhatIfSummary
from dayplanner.services.plan_diff_service import PlanDiffService
from dayplanner.services.planner_service import PlannerInputLike, PlannerOptionsLike, plan_day
from dayplanner.utils.datetime_utils import add_minutes
from dayplanner.utils.validators import parse_plan, parse_planner_input, parse_scenario

logger = setup_logger(__name__)

DEFAULT_PRIORITY_INCREASE = 10
DEFAULT_DELAY_MINUTES = 60
MAX_SCORE = 100

PRIORITY_ESCALATION: dict[Priority, Priority] = {
    Priority.COULD: Priority.SHOULD,
    Priority.SHOULD: Priority.MUST,
}


class ImpactLog:
    """Titles of touched tasks, in order, with an id index against duplicates."""

    def __init__(self) -> None:
        self.titles: list[str] = []
        self._task_ids: set[str] = set()

    def record(self, task_id: str, title: str) -> None:
        if task_id in self._task_ids:
            return
        self._task_ids.add(task_id)
        self.titles.append(title)


ScenarioHandler = Callable[[PlannerInput, WhatIfScenario, ImpactLog], PlannerInput]


def _increase_priority(
    planner_input: PlannerInput, scenario: WhatIfScenario, impacted: ImpactLog
) -> PlannerInput:
    if not scenario.task_id:
        return planner_input
    increase = scenario.increase if scenario.increase is not None else DEFAULT_PRIORITY_INCREASE

    def mutate(task: Task) -> Task:
        if task.id != scenario.task_id:
            return task
        impacted.record(task.id, task.title)
        return task.model_copy(
            update={
                "score": min(MAX_SCORE, task.score + increase),
                "priority": PRIORITY_ESCALATION.get(task.priority, task.priority),
            }
        )

    return planner_input.model_copy(update={"tasks": [mutate(task) for task in planner_input.tasks]})


def _delay_deadline(
    planner_input: PlannerInput, scenario: WhatIfScenario, impacted: ImpactLog
) -> PlannerInput:
    if not scenario.task_id:
        return planner_input
    delay = scenario.delay_minutes if scenario.delay_minutes is not None else DEFAULT_DELAY_MINUTES

    def mutate(task: Task) -> Task:
        if task.id != scenario.task_id or task.due_date is None:
            return task
        impacted.record(task.id, task.title)
        return task.model_copy(update={"due_date": add_minutes(task.due_date, delay)})

    return planner_input.model_copy(update={"tasks": [mutate(task) for task in planner_input.tasks]})


def _add_task(
    planner_input: PlannerInput, scenario: WhatIfScenario, impacted: ImpactLog
) -> PlannerInput:
    if scenario.new_task is None:
        return planner_input
    payload = scenario.new_task.model_dump()
    payload["id"] = payload.get("id") or str(uuid4())
    new_task = Task.model_validate(payload)
    impacted.record(new_task.id, new_task.title)
    return planner_input.model_copy(update={"tasks": [*planner_input.tasks, new_task]})


SCENARIO_HANDLERS: dict[ScenarioType, ScenarioHandler] = {
    ScenarioType.INCREASE_PRIORITY: _increase_priority,
    ScenarioType.DELAY_DEADLINE: _delay_deadline,
    ScenarioType.ADD_TASK: _add_task,
}


def run_what_if_scenario(
    raw_input: PlannerInputLike,
    baseline_plan: Union[Plan, dict[str, Any]],
    raw_scenario: Union[WhatIfScenario, dict[str, Any]],
    raw_options: PlannerOptionsLike = None,
) -> WhatIfResult:
    """
    Apply one scenario to the input, replan and compare with the baseline.

    Args:
        raw_input: Current planner input
        baseline_plan: Plan to compare against (validated, never recomputed)
        raw_scenario: Mutation to apply
        raw_options: Options for the scenario run (defaults when None)

    Returns:
        WhatIfResult with both plans, an impact summary and a per-task diff

    Raises:
        ValidationError: If input, baseline or scenario break their contract
    """
    planner_input = parse_planner_input(raw_input)
    scenario = parse_scenario(raw_scenario)
    baseline = parse_plan(baseline_plan)

    impacted = ImpactLog()
    handler: Optional[ScenarioHandler] = SCENARIO_HANDLERS.get(scenario.type)
    mutated_input = handler(planner_input, scenario, impacted) if handler else planner_input
    scenario_plan = plan_day(mutated_input, raw_options)

    if impacted.titles:
        message = f"Scenario applied with impact on: {', '.join(impacted.titles)}"
    else:
        message = "Scenario applied with no significant variation"
    logger.info(f"What-if {scenario.type.value}: {message}")

    return WhatIfResult(
        baseline=baseline,
        scenario=scenario_plan,
        summary=WhatIfSummary(message=message, impacted_tasks=impacted.titles),
        diff=PlanDiffService().calculate_diff(baseline, scenario_plan),
    )
