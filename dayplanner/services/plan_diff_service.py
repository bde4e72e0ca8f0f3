"""
Plan diff service for comparing a baseline plan with a scenario plan.

Tasks are matched by originating task id (TASK block source or unscheduled
task id).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dayplanner.models.enums import BlockType
from dayplanner.models.plan import Plan
from dayplanner.models.what_if import PlanDiff, TaskDiffStatus, TaskPlanDiff
from dayplanner.services.scheduler_service import PARTIAL_SUFFIX
from dayplanner.utils.datetime_utils import duration_minutes

STATUSES: tuple[str, ...] = (
    "unchanged",
    "moved",
    "new",
    "removed",
    "newly_scheduled",
    "newly_unscheduled",
)


class _TaskPlacement:
    """Where a task landed in one plan."""

    def __init__(self, title: str):
        self.title = title
        self.first_start: Optional[datetime] = None
        self.minutes = 0
        self.unscheduled = False


def _collect_placements(plan: Plan) -> dict[str, _TaskPlacement]:
    placements: dict[str, _TaskPlacement] = {}
    for block in plan.blocks:
        if block.type != BlockType.TASK or block.source_id is None:
            continue
        placement = placements.setdefault(
            block.source_id, _TaskPlacement(block.title.removesuffix(PARTIAL_SUFFIX))
        )
        if placement.first_start is None or block.start < placement.first_start:
            placement.first_start = block.start
        placement.minutes += duration_minutes(block.start, block.end)
    for task in plan.unscheduled_tasks:
        placement = placements.setdefault(task.id, _TaskPlacement(task.title))
        placement.title = task.title
        placement.unscheduled = True
    return placements


class PlanDiffService:
    """Service for calculating plan differences."""

    def _get_diff_status(
        self,
        baseline: Optional[_TaskPlacement],
        scenario: Optional[_TaskPlacement],
    ) -> TaskDiffStatus:
        """Determine how a task's placement changed."""
        if baseline is None:
            return "new"
        if scenario is None:
            return "removed"
        if baseline.unscheduled and not scenario.unscheduled:
            return "newly_scheduled"
        if scenario.unscheduled and not baseline.unscheduled:
            return "newly_unscheduled"
        if baseline.first_start == scenario.first_start and baseline.minutes == scenario.minutes:
            return "unchanged"
        return "moved"

    def calculate_diff(self, baseline: Plan, scenario: Plan) -> PlanDiff:
        """
        Calculate the difference between two plans of the same day.

        Args:
            baseline: Plan the caller already has
            scenario: Plan recomputed after a what-if mutation

        Returns:
            PlanDiff with one entry per task and aggregate deltas
        """
        baseline_tasks = _collect_placements(baseline)
        scenario_tasks = _collect_placements(scenario)

        task_ids = list(baseline_tasks)
        task_ids.extend(task_id for task_id in scenario_tasks if task_id not in baseline_tasks)

        summary = {f"{status}_count": 0 for status in STATUSES}
        task_diffs: list[TaskPlanDiff] = []
        for task_id in task_ids:
            before = baseline_tasks.get(task_id)
            after = scenario_tasks.get(task_id)
            status = self._get_diff_status(before, after)
            task_diffs.append(
                TaskPlanDiff(
                    task_id=task_id,
                    title=(after or before).title,
                    status=status,
                    baseline_start=before.first_start if before else None,
                    scenario_start=after.first_start if after else None,
                    baseline_minutes=before.minutes if before else 0,
                    scenario_minutes=after.minutes if after else 0,
                )
            )
            summary[f"{status}_count"] += 1

        summary["focus_minutes_delta"] = (
            scenario.summary.total_focus_minutes - baseline.summary.total_focus_minutes
        )
        summary["meetings_minutes_delta"] = (
            scenario.summary.total_meetings_minutes - baseline.summary.total_meetings_minutes
        )
        summary["slack_minutes_delta"] = (
            scenario.summary.slack_minutes - baseline.summary.slack_minutes
        )
        summary["unscheduled_delta"] = len(scenario.unscheduled_tasks) - len(
            baseline.unscheduled_tasks
        )
        return PlanDiff(task_diffs=task_diffs, summary=summary)
