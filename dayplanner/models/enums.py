"""
Enum definitions for the planner.

These enums are used across models and provide type-safe priority/category values.
"""

from enum import Enum


class Priority(str, Enum):
    """MoSCoW priority of a task."""

    MUST = "MUST"
    SHOULD = "SHOULD"
    COULD = "COULD"
    WONT = "WONT"


class FocusType(str, Enum):
    """
    Kind of attention a task needs.

    DEEP = Uninterrupted concentration
    LIGHT = Shallow work that tolerates interruptions
    MEETING = Work done together with other people
    """

    DEEP = "DEEP"
    LIGHT = "LIGHT"
    MEETING = "MEETING"


class BlockFocusType(str, Enum):
    """Focus type of a plan block (adds RECOVERY for breaks)."""

    DEEP = "DEEP"
    LIGHT = "LIGHT"
    MEETING = "MEETING"
    RECOVERY = "RECOVERY"


class BlockType(str, Enum):
    """Plan block type."""

    TASK = "TASK"
    EVENT = "EVENT"
    BUFFER = "BUFFER"
    BREAK = "BREAK"


class EventCategory(str, Enum):
    """Calendar event category."""

    MEETING = "MEETING"
    FOCUS = "FOCUS"
    TRAVEL = "TRAVEL"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"


class EventFlexibility(str, Enum):
    """Whether an event can be moved."""

    FIXED = "FIXED"
    MOVABLE = "MOVABLE"
    OPTIONAL = "OPTIONAL"


class EventSource(str, Enum):
    """Where an event lives."""

    EXTERNAL = "EXTERNAL"
    INTERNAL = "INTERNAL"


class CreatedFrom(str, Enum):
    """Which collaborator produced an event."""

    CALENDAR = "CALENDAR"
    EMAIL = "EMAIL"
    TASK = "TASK"
    SYSTEM = "SYSTEM"


class ConstraintType(str, Enum):
    """Constraint strength."""

    HARD = "HARD"
    SOFT = "SOFT"


class RiskSeverity(str, Enum):
    """Severity of a plan risk."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ScenarioType(str, Enum):
    """What-if scenario kinds."""

    INCREASE_PRIORITY = "INCREASE_PRIORITY"
    DELAY_DEADLINE = "DELAY_DEADLINE"
    ADD_TASK = "ADD_TASK"
