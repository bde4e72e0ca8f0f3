"""
Day timeline: free time computation and break synthesis.

Turns working hours, calendar events and protected focus blocks into the
free intervals the scheduler may fill.
"""

from __future__ import annotations

from dayplanner.core.logger import setup_logger
from dayplanner.models.enums import BlockFocusType, BlockType, EventCategory, EventFlexibility
from dayplanner.models.plan import PlanBlock
from dayplanner.models.planner_input import PlannerInput, PlannerOptions
from dayplanner.utils.datetime_utils import duration_minutes, resolve_day_boundary, to_utc
from dayplanner.utils.intervals import (
    Interval,
    clamp_interval,
    expand_interval,
    has_minimum_duration,
    merge_intervals,
    sort_intervals,
    subtract_interval,
)

logger = setup_logger(__name__)

BUFFERED_CATEGORIES = (EventCategory.MEETING, EventCategory.TRAVEL)

BREAK_TITLE = "Recovery break"
BREAK_EXPLANATION = "Inserted automatically to keep energy up"


class DayTimeline:
    """
    Free/busy view of a single day.

    Busy time is every event span, a buffer around meetings and travel, and
    every declared focus block.
    """

    def __init__(self, planner_input: PlannerInput, options: PlannerOptions):
        self.input = planner_input
        self.options = options
        self.minimum_break_minutes = planner_input.preferences.minimum_break_minutes
        self.day_intervals = [
            Interval(
                resolve_day_boundary(planner_input.date, window.start, planner_input.timezone),
                resolve_day_boundary(planner_input.date, window.end, planner_input.timezone),
            )
            for window in planner_input.preferences.working_hours
        ]
        self.busy: list[Interval] = []
        self._add_events()
        self._add_focus_blocks()

    def get_available_intervals(self) -> list[Interval]:
        """Free intervals across all working windows, ascending."""
        merged_busy = merge_intervals(self.busy)

        free: list[Interval] = []
        for day_interval in self.day_intervals:
            segments = [day_interval]
            for busy in merged_busy:
                if busy.end <= day_interval.start or busy.start >= day_interval.end:
                    continue
                clamped = clamp_interval(busy, day_interval)
                next_segments: list[Interval] = []
                for segment in segments:
                    next_segments.extend(subtract_interval(segment, clamped))
                segments = next_segments
            free.extend(
                segment
                for segment in segments
                if has_minimum_duration(segment, self.minimum_break_minutes)
            )

        logger.debug(
            f"Timeline {self.input.date}: {len(self.day_intervals)} windows, "
            f"{len(merged_busy)} busy spans, {len(free)} free intervals"
        )
        return sort_intervals(free)

    def get_existing_event_blocks(self) -> list[PlanBlock]:
        """One EVENT block per calendar event, untouched by the scheduler."""
        return [
            PlanBlock(
                id=event.id,
                type=BlockType.EVENT,
                title=event.title,
                start=event.start,
                end=event.end,
                source_id=event.id,
                focus_type=(
                    BlockFocusType.MEETING
                    if event.category == EventCategory.MEETING
                    else BlockFocusType.LIGHT
                ),
                explanations=[
                    "Fixed event" if event.flexibility == EventFlexibility.FIXED else "Flexible event"
                ],
            )
            for event in self.input.events
        ]

    def _add_events(self) -> None:
        for event in self.input.events:
            span = Interval(event.start, event.end)
            self.busy.append(span)
            if event.category in BUFFERED_CATEGORIES:
                self.busy.append(expand_interval(span, self.options.buffer_before_meetings))

    def _add_focus_blocks(self) -> None:
        for block in self.input.preferences.focus_blocks:
            self.busy.append(
                Interval(
                    resolve_day_boundary(self.input.date, block.start, self.input.timezone),
                    resolve_day_boundary(self.input.date, block.end, self.input.timezone),
                )
            )


def build_break_blocks(blocks: list[PlanBlock], minimum_break_minutes: int) -> list[PlanBlock]:
    """
    Synthesize BREAK blocks in the idle gaps between adjacent blocks.

    Only gaps of at least minimum_break_minutes produce a break; capacity
    computed by the scheduler is left untouched.
    """
    if not blocks:
        return []

    ordered = sorted(blocks, key=lambda block: to_utc(block.start))
    breaks: list[PlanBlock] = []
    for index, (current, following) in enumerate(zip(ordered, ordered[1:])):
        if to_utc(following.start) <= to_utc(current.end):
            continue
        gap = duration_minutes(current.end, following.start)
        if gap >= minimum_break_minutes:
            breaks.append(
                PlanBlock(
                    id=f"{current.id}-break-{index}",
                    type=BlockType.BREAK,
                    title=BREAK_TITLE,
                    start=current.end,
                    end=following.start,
                    source_id=None,
                    focus_type=BlockFocusType.RECOVERY,
                    explanations=[BREAK_EXPLANATION],
                )
            )
    return breaks
