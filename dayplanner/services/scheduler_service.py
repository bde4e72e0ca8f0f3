"""
Scheduler service for placing ranked tasks into free time.

Greedy, priority-ordered allocation with dependency gating and optional
fragmentation across free intervals.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from dayplanner.core.logger import setup_logger
from dayplanner.models.enums import BlockFocusType, BlockType, FocusType
from dayplanner.models.plan import PlanBlock, PlanDecision
from dayplanner.models.planner_input import PlannerOptions
from dayplanner.models.task import RankedTask
from dayplanner.utils.datetime_utils import add_minutes, duration_minutes
from dayplanner.utils.intervals import Interval

logger = setup_logger(__name__)

PARTIAL_SUFFIX = " (partial)"


@dataclass
class ScheduleResult:
    """Blocks, audit trail and leftover work of one scheduling pass."""

    blocks: list[PlanBlock] = field(default_factory=list)
    decisions: list[PlanDecision] = field(default_factory=list)
    remaining: list[RankedTask] = field(default_factory=list)


class TaskScheduler:
    """
    Greedy allocator for ranked tasks.

    Provides:
    - Strict priority order (highest weight runnable task first)
    - Hard dependency gating within the task batch
    - Optional splitting of a task across free intervals
    """

    def __init__(self, options: PlannerOptions):
        self.options = options

    def schedule(self, tasks: list[RankedTask], intervals: list[Interval]) -> ScheduleResult:
        """
        Allocate tasks into free intervals.

        Args:
            tasks: Ranked tasks (descending weight); their remaining_minutes are consumed
            intervals: Free intervals in ascending order

        Returns:
            ScheduleResult. Infeasibility shows up as a non-empty remaining list.
        """
        result = ScheduleResult()
        marked: list[RankedTask] = []
        marked_ids: set[str] = set()

        def mark_remaining(task: RankedTask) -> None:
            if task.id not in marked_ids:
                marked_ids.add(task.id)
                marked.append(task)

        for interval in intervals:
            cursor = interval.start

            while any(task.remaining_minutes > 0 for task in tasks):
                next_task = next(
                    (candidate for candidate in tasks if self._is_runnable(candidate, tasks)),
                    None,
                )
                if next_task is None:
                    break

                task_end = add_minutes(cursor, next_task.remaining_minutes)

                if task_end <= interval.end:
                    block = self._create_task_block(cursor, task_end, next_task, partial=False)
                    result.blocks.append(block)
                    result.decisions.append(
                        PlanDecision(
                            id=str(uuid4()),
                            title=f'Assigned "{next_task.title}"',
                            rationale=(
                                f"Allocated a full block from {cursor.isoformat()} to "
                                f"{task_end.isoformat()} following priority and estimate."
                            ),
                            related_block_id=block.id,
                        )
                    )
                    logger.debug(f"Placed {next_task.id} {cursor.isoformat()}-{task_end.isoformat()}")
                    cursor = task_end
                    next_task.remaining_minutes = 0
                    continue

                if self.options.allow_task_splitting:
                    minutes_available = duration_minutes(cursor, interval.end)
                    if minutes_available <= 0:
                        break
                    fragment_end = add_minutes(cursor, minutes_available)
                    block = self._create_task_block(cursor, fragment_end, next_task, partial=True)
                    result.blocks.append(block)
                    result.decisions.append(
                        PlanDecision(
                            id=str(uuid4()),
                            title=f'Fragmented "{next_task.title}"',
                            rationale=(
                                f"Used {minutes_available} minutes, "
                                f"{next_task.remaining_minutes - minutes_available} minutes "
                                "left to schedule."
                            ),
                            related_block_id=block.id,
                        )
                    )
                    logger.debug(
                        f"Fragmented {next_task.id}: {minutes_available} min in "
                        f"{cursor.isoformat()}-{fragment_end.isoformat()}"
                    )
                    next_task.remaining_minutes -= minutes_available

                # Strict priority order: the rest of this interval stays unused
                mark_remaining(next_task)
                break

        result.remaining = [task for task in marked if task.remaining_minutes > 0]
        result.remaining.extend(
            task
            for task in tasks
            if task.remaining_minutes > 0 and task.id not in marked_ids
        )

        logger.info(
            f"Scheduled {len(result.blocks)} blocks across {len(intervals)} free intervals, "
            f"{len(result.remaining)}/{len(tasks)} tasks left with remaining work"
        )
        return result

    @staticmethod
    def _is_runnable(task: RankedTask, tasks: list[RankedTask]) -> bool:
        if task.remaining_minutes <= 0:
            return False
        return all(
            not any(
                candidate.id == dependency_id and candidate.remaining_minutes > 0
                for candidate in tasks
            )
            for dependency_id in task.task.dependencies
        )

    @staticmethod
    def _create_task_block(
        start: datetime,
        end: datetime,
        task: RankedTask,
        partial: bool,
    ) -> PlanBlock:
        focus_type = {
            FocusType.DEEP: BlockFocusType.DEEP,
            FocusType.MEETING: BlockFocusType.MEETING,
        }.get(task.task.focus_type, BlockFocusType.LIGHT)

        due_date = task.task.due_date
        return PlanBlock(
            id=str(uuid4()),
            type=BlockType.TASK,
            title=f"{task.title}{PARTIAL_SUFFIX}" if partial else task.title,
            start=start,
            end=end,
            source_id=task.id,
            focus_type=focus_type,
            explanations=[
                f"Priority {task.task.priority.value}",
                f"Due {due_date.isoformat()}" if due_date else "No due date",
                "Split for lack of continuous time" if partial else "Full allocation",
            ],
        )
