"""Single-day time-blocking planner."""

from dayplanner.services.planner_service import explain_block, merge_planner_input, plan_day
from dayplanner.services.what_if_service import run_what_if_scenario

__version__ = "2.0.0"

__all__ = [
    "explain_block",
    "merge_planner_input",
    "plan_day",
    "run_what_if_scenario",
]
