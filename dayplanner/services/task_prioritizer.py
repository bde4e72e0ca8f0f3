"""
Task ranking for allocation order.
"""

from datetime import datetime
from typing import Optional

from dayplanner.models.enums import Priority
from dayplanner.models.task import RankedTask, Task
from dayplanner.utils.datetime_utils import duration_minutes, now_utc

PRIORITY_WEIGHT: dict[Priority, int] = {
    Priority.MUST: 4,
    Priority.SHOULD: 3,
    Priority.COULD: 2,
    Priority.WONT: 1,
}


def calculate_weight(task: Task, reference_time: datetime) -> float:
    """
    Deterministic ranking weight.

    Priority tier dominates, score breaks ties within a tier, and an imminent
    deadline adds up to 1000 so that it outranks everything else.
    """
    urgency = 0.0
    if task.due_date:
        urgency = 1 / max(1, duration_minutes(reference_time, task.due_date))
    return PRIORITY_WEIGHT[task.priority] * 100 + task.score + urgency * 1000


def rank_tasks(tasks: list[Task], reference_time: Optional[datetime] = None) -> list[RankedTask]:
    """Wrap tasks in fresh working state, sorted by descending weight (stable)."""
    reference = reference_time or now_utc()
    ranked = [
        RankedTask(
            task=task,
            weight=calculate_weight(task, reference),
            remaining_minutes=task.estimated_minutes,
        )
        for task in tasks
    ]
    return sorted(ranked, key=lambda item: -item.weight)
