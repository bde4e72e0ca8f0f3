"""
Unit tests for the day-planning pipeline.
"""

import copy
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from dayplanner.core.exceptions import DependencyCycleError, NotFoundError, ValidationError
from dayplanner.models.enums import BlockType, RiskSeverity
from dayplanner.models.planner_input import PlannerInput
from dayplanner.services.planner_service import explain_block, merge_planner_input, plan_day

TZ = ZoneInfo("Europe/Rome")


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 5, 6, hour, minute, tzinfo=TZ)


def spans(plan) -> list[tuple]:
    return [(block.type, block.start, block.end) for block in plan.blocks]


def task(task_id: str, minutes: int, priority: str = "SHOULD", **extra) -> dict:
    return {
        "id": task_id,
        "title": f"Task {task_id}",
        "estimated_minutes": minutes,
        "priority": priority,
        **extra,
    }


class TestPlanDay:
    def test_task_is_split_around_meeting(self, day_payload, options_payload):
        plan = plan_day(day_payload, options_payload)

        assert spans(plan) == [
            (BlockType.TASK, at(9, 0), at(9, 50)),
            (BlockType.EVENT, at(10, 0), at(11, 0)),
            (BlockType.TASK, at(11, 10), at(12, 20)),
        ]
        assert plan.blocks[0].title == "Write report (partial)"
        assert plan.blocks[2].title == "Write report"
        assert plan.unscheduled_tasks == []

        summary = plan.summary
        assert summary.objectives == ["Write report"]
        assert summary.total_focus_minutes == 120
        assert summary.total_meetings_minutes == 60
        assert summary.total_break_minutes == 0
        assert summary.scheduled_minutes == 180
        assert summary.slack_minutes == 20
        assert summary.risks == []

    def test_metadata_is_stamped(self, day_payload, options_payload):
        plan = plan_day(day_payload, options_payload)

        assert plan.metadata.generator == "Dayplanner Engine"
        assert plan.metadata.version == "2.0.0"
        assert plan.metadata.generated_at.tzinfo is not None

    def test_accepts_models_and_does_not_mutate_input(self, day_payload, options_payload):
        original = copy.deepcopy(day_payload)
        planner_input = PlannerInput.model_validate(day_payload)
        before = planner_input.model_dump()

        first = plan_day(day_payload, options_payload)
        second = plan_day(planner_input, options_payload)

        assert day_payload == original
        assert planner_input.model_dump() == before
        assert spans(first) == spans(second)
        assert [b.title for b in first.blocks] == [b.title for b in second.blocks]

    def test_unscheduled_task_becomes_risk(self, day_payload, options_payload):
        day_payload["preferences"]["working_hours"] = [{"start": "09:00", "end": "09:50"}]
        day_payload["tasks"][0]["due_date"] = "2024-05-06T18:00:00+02:00"

        plan = plan_day(day_payload, {**options_payload, "allow_task_splitting": False})

        assert [t.id for t in plan.unscheduled_tasks] == ["t1"]
        risk = plan.summary.risks[0]
        assert risk.severity == RiskSeverity.HIGH
        assert risk.description == 'Task "Write report" was not scheduled (120 minutes remaining).'
        assert "2024-05-06T18:00:00+02:00" in risk.mitigation

    def test_break_inserted_in_long_gap(self, day_payload, options_payload):
        day_payload["events"] = []
        day_payload["preferences"]["working_hours"] = [
            {"start": "09:00", "end": "10:00"},
            {"start": "11:00", "end": "12:00"},
        ]
        day_payload["tasks"] = [task("a", 60, "MUST"), task("b", 60)]

        plan = plan_day(day_payload, {**options_payload, "allow_task_splitting": False})

        assert spans(plan) == [
            (BlockType.TASK, at(9, 0), at(10, 0)),
            (BlockType.BREAK, at(10, 0), at(11, 0)),
            (BlockType.TASK, at(11, 0), at(12, 0)),
        ]
        assert plan.summary.total_break_minutes == 60
        assert plan.summary.slack_minutes == 0

    def test_short_gap_gets_no_break(self, day_payload, options_payload):
        day_payload["tasks"] = []
        day_payload["events"].append(
            {
                "id": "m2",
                "title": "Review",
                "start": "2024-05-06T11:10:00+02:00",
                "end": "2024-05-06T12:00:00+02:00",
                "category": "OTHER",
            }
        )

        plan = plan_day(day_payload, options_payload)

        assert [block.type for block in plan.blocks] == [BlockType.EVENT, BlockType.EVENT]

    def test_dependencies_are_respected(self, day_payload, options_payload):
        day_payload["events"] = []
        day_payload["tasks"] = [
            task("deploy", 30, "MUST", dependencies=["test"]),
            task("test", 45, "COULD", dependencies=["build"]),
            task("build", 20, "WONT"),
        ]

        plan = plan_day(day_payload, options_payload)

        order = [block.source_id for block in plan.blocks]
        assert order == ["build", "test", "deploy"]
        for first, second in zip(plan.blocks, plan.blocks[1:]):
            assert first.end <= second.start

    def test_email_tasks_are_opt_in(self, day_payload, options_payload):
        day_payload["email_actions"] = [
            {
                "id": "mail-1",
                "subject": "Invoice",
                "snippet": "Please send the invoice",
                "extracted_tasks": [task("e1", 30)],
            }
        ]

        without = plan_day(day_payload, options_payload)
        with_email = plan_day(day_payload, {**options_payload, "include_email_tasks": True})

        assert "e1" not in {block.source_id for block in without.blocks}
        assert "e1" in {block.source_id for block in with_email.blocks}


class TestDependencyCycles:
    def test_cycle_is_rejected(self, day_payload, options_payload):
        day_payload["tasks"] = [
            task("a", 30, dependencies=["b"]),
            task("b", 30, dependencies=["a"]),
        ]

        with pytest.raises(DependencyCycleError) as exc_info:
            plan_day(day_payload, options_payload)

        assert exc_info.value.cycles == [["a", "b"]]
        assert "Task a -> Task b" in exc_info.value.message

    def test_cycle_left_unscheduled_when_allowed(self, day_payload, options_payload):
        day_payload["tasks"] = [
            task("a", 30, dependencies=["b"]),
            task("b", 30, dependencies=["a"]),
            task("c", 30),
        ]

        plan = plan_day(day_payload, {**options_payload, "reject_dependency_cycles": False})

        assert {t.id for t in plan.unscheduled_tasks} == {"a", "b"}
        assert "c" in {block.source_id for block in plan.blocks}


class TestValidation:
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda p: p.pop("preferences"),
            lambda p: p["tasks"][0].update(estimated_minutes=3),
            lambda p: p["tasks"][0].update(score=120),
            lambda p: p.update(timezone="Mars/Olympus"),
            lambda p: p["events"][0].update(end="2024-05-06T09:00:00+02:00"),
            lambda p: p["preferences"]["working_hours"].append({"start": "25:00", "end": "26:00"}),
            lambda p: p["tasks"].append(dict(p["tasks"][0])),
        ],
    )
    def test_invalid_input_is_rejected(self, day_payload, options_payload, mutate):
        mutate(day_payload)

        with pytest.raises(ValidationError) as exc_info:
            plan_day(day_payload, options_payload)

        assert exc_info.value.message == "Invalid planner input"
        assert exc_info.value.details

    def test_invalid_options_are_rejected(self, day_payload):
        with pytest.raises(ValidationError):
            plan_day(day_payload, {"buffer_before_meetings": -5})


class TestMergePlannerInput:
    def test_preferences_are_merged_key_by_key(self, day_payload):
        merged = merge_planner_input(
            day_payload,
            {"preferences": {"minimum_break_minutes": 30}, "timezone": None},
        )

        assert merged.preferences.minimum_break_minutes == 30
        assert [w.start for w in merged.preferences.working_hours] == ["09:00"]
        assert merged.timezone == "Europe/Rome"

    def test_lists_are_replaced(self, day_payload):
        merged = merge_planner_input(day_payload, {"tasks": [task("x", 15)], "events": []})

        assert [t.id for t in merged.tasks] == ["x"]
        assert merged.events == []

    def test_invalid_override_is_rejected(self, day_payload):
        with pytest.raises(ValidationError):
            merge_planner_input(day_payload, {"preferences": {"minimum_break_minutes": -1}})

    def test_no_overrides_returns_validated_copy(self, day_payload):
        merged = merge_planner_input(day_payload)
        assert merged.tasks[0].id == "t1"


class TestExplainBlock:
    def test_task_block_includes_decision_rationale(self, day_payload, options_payload):
        plan = plan_day(day_payload, options_payload)
        block = plan.blocks[0]

        explanations = explain_block(plan, block.id)

        assert explanations[:3] == [
            "Priority MUST",
            "No due date",
            "Split for lack of continuous time",
        ]
        assert explanations[3] == "Used 50 minutes, 70 minutes left to schedule."

    def test_event_block(self, day_payload, options_payload):
        plan = plan_day(day_payload, options_payload)
        assert explain_block(plan.model_dump(), "m1") == ["Fixed event"]

    def test_unknown_block(self, day_payload, options_payload):
        plan = plan_day(day_payload, options_payload)
        with pytest.raises(NotFoundError):
            explain_block(plan, "missing")


class TestDaylightSavingTransition:
    """2024-03-31 in Europe/Rome skips from 02:00 to 03:00."""

    @pytest.fixture
    def dst_payload(self, day_payload) -> dict:
        day_payload["date"] = "2024-03-31"
        day_payload["events"] = []
        day_payload["preferences"]["working_hours"] = [{"start": "00:00", "end": "06:00"}]
        day_payload["tasks"] = [task("long", 330, "MUST")]
        return day_payload

    def test_elapsed_minutes_are_conserved(self, dst_payload):
        plan = plan_day(dst_payload, {"reference_time": "2024-03-30T20:00:00+01:00"})

        start = datetime(2024, 3, 31, 0, 0, tzinfo=TZ)
        end = datetime(2024, 3, 31, 6, 0, tzinfo=TZ)
        assert [(b.start, b.end) for b in plan.blocks] == [(start, end)]
        assert plan.summary.total_focus_minutes == 300
        assert [t.id for t in plan.unscheduled_tasks] == ["long"]
        assert plan.summary.risks[0].description == (
            'Task "Task long" was not scheduled (30 minutes remaining).'
        )

    def test_task_fitting_real_window_is_placed(self, dst_payload):
        dst_payload["tasks"] = [task("fits", 300, "MUST")]

        plan = plan_day(dst_payload, {"reference_time": "2024-03-30T20:00:00+01:00"})

        assert plan.unscheduled_tasks == []
        assert plan.blocks[0].end == datetime(2024, 3, 31, 6, 0, tzinfo=TZ)
