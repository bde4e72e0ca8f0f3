"""
Custom exceptions for the planner.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for dayplanner."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PlannerError):
    """Resource not found."""

    pass


class ValidationError(PlannerError):
    """Input, plan or scenario record failed its structural contract."""

    pass


class IntervalOrderingError(PlannerError):
    """Interval constructed with start at or after end."""

    def __init__(self, start: Any, end: Any):
        super().__init__(
            f"Invalid interval: {start} must precede {end}",
            details={"start": str(start), "end": str(end)},
        )
        self.start = start
        self.end = end


class BusinessLogicError(PlannerError):
    """Business logic constraint violation."""

    pass


class DependencyCycleError(BusinessLogicError):
    """Task dependencies form a cycle."""

    def __init__(self, message: str, cycles: list[list[str]]):
        super().__init__(message, details={"cycles": cycles})
        self.cycles = cycles
