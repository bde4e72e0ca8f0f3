"""
Unit tests for PlanDiffService.
"""

from datetime import date, datetime, timezone

import pytest

from dayplanner.models.enums import BlockFocusType, BlockType
from dayplanner.models.plan import Plan, PlanBlock, PlanMetadata, PlanSummary
from dayplanner.models.task import Task
from dayplanner.services.plan_diff_service import PlanDiffService


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 5, 6, hour, minute, tzinfo=timezone.utc)


def task_block(task_id: str, start: datetime, end: datetime, partial: bool = False) -> PlanBlock:
    title = f"Task {task_id}" + (" (partial)" if partial else "")
    return PlanBlock(
        id=f"{task_id}-{start.isoformat()}",
        type=BlockType.TASK,
        title=title,
        start=start,
        end=end,
        source_id=task_id,
        focus_type=BlockFocusType.DEEP,
    )


def make_task(task_id: str) -> Task:
    return Task(id=task_id, title=f"Task {task_id}", estimated_minutes=30)


def make_plan(
    blocks: list[PlanBlock],
    unscheduled: list[Task] | None = None,
    focus: int = 0,
    meetings: int = 0,
    slack: int = 0,
) -> Plan:
    return Plan(
        summary=PlanSummary(
            date=date(2024, 5, 6),
            timezone="UTC",
            objectives=[],
            total_focus_minutes=focus,
            total_meetings_minutes=meetings,
            slack_minutes=slack,
        ),
        blocks=blocks,
        decisions=[],
        unscheduled_tasks=unscheduled or [],
        metadata=PlanMetadata(generated_at=at(7), generator="test", version="0"),
    )


@pytest.fixture
def service() -> PlanDiffService:
    return PlanDiffService()


def test_identical_plans_are_unchanged(service):
    plan = make_plan([task_block("a", at(9), at(10))])

    diff = service.calculate_diff(plan, plan)

    assert [(d.task_id, d.status) for d in diff.task_diffs] == [("a", "unchanged")]
    assert diff.summary["unchanged_count"] == 1
    assert diff.summary["focus_minutes_delta"] == 0


def test_every_status(service):
    baseline = make_plan(
        [
            task_block("same", at(9), at(10)),
            task_block("shifted", at(10), at(11)),
            task_block("dropped", at(11), at(12)),
            task_block("squeezed", at(13), at(14)),
        ],
        unscheduled=[make_task("late"), make_task("gone")],
        focus=240,
        slack=30,
    )
    scenario = make_plan(
        [
            task_block("same", at(9), at(10)),
            task_block("shifted", at(11), at(12)),
            task_block("late", at(10), at(11)),
            task_block("added", at(14), at(14, 30)),
        ],
        unscheduled=[make_task("dropped"), make_task("squeezed")],
        focus=210,
        meetings=15,
        slack=10,
    )

    diff = service.calculate_diff(baseline, scenario)
    statuses = {d.task_id: d.status for d in diff.task_diffs}

    assert statuses == {
        "same": "unchanged",
        "shifted": "moved",
        "dropped": "newly_unscheduled",
        "squeezed": "newly_unscheduled",
        "late": "newly_scheduled",
        "gone": "removed",
        "added": "new",
    }
    assert diff.summary["moved_count"] == 1
    assert diff.summary["newly_unscheduled_count"] == 2
    assert diff.summary["removed_count"] == 1
    assert diff.summary["focus_minutes_delta"] == -30
    assert diff.summary["meetings_minutes_delta"] == 15
    assert diff.summary["slack_minutes_delta"] == -20
    assert diff.summary["unscheduled_delta"] == 0


def test_fragments_are_aggregated(service):
    baseline = make_plan([task_block("a", at(9), at(10))])
    scenario = make_plan(
        [
            task_block("a", at(9), at(9, 30), partial=True),
            task_block("a", at(11), at(11, 20)),
        ]
    )

    diff = service.calculate_diff(baseline, scenario)
    entry = diff.task_diffs[0]

    assert entry.status == "moved"
    assert entry.title == "Task a"
    assert entry.baseline_minutes == 60
    assert entry.scenario_minutes == 50
    assert entry.scenario_start == at(9)


def test_event_and_break_blocks_are_ignored(service):
    event = PlanBlock(id="m1", type=BlockType.EVENT, title="Sync", start=at(9), end=at(10), source_id="m1")
    baseline = make_plan([event])

    diff = service.calculate_diff(baseline, make_plan([]))

    assert diff.task_diffs == []
