"""
Interval algebra over absolute timestamps.

All operations are pure and return new intervals in chronological order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from dayplanner.core.exceptions import IntervalOrderingError
from dayplanner.utils.datetime_utils import add_minutes, duration_minutes, to_utc


@dataclass(frozen=True)
class Interval:
    """Half-open span of time, stored in UTC."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))
        if self.start >= self.end:
            raise IntervalOrderingError(self.start, self.end)


def to_interval(start: datetime, end: datetime) -> Interval:
    """Build an interval, raising IntervalOrderingError when start >= end."""
    return Interval(start, end)


def clamp_interval(target: Interval, bounds: Interval) -> Interval:
    """Restrict target to bounds; returns bounds when the result would invert."""
    start = max(target.start, bounds.start)
    end = min(target.end, bounds.end)
    if start >= end:
        return bounds
    return Interval(start, end)


def expand_interval(
    interval: Interval,
    minutes_before: float,
    minutes_after: Optional[float] = None,
) -> Interval:
    after = minutes_before if minutes_after is None else minutes_after
    return Interval(
        add_minutes(interval.start, -minutes_before),
        add_minutes(interval.end, after),
    )


def subtract_interval(source: Interval, removal: Interval) -> list[Interval]:
    """
    Remove removal's coverage from source.

    Returns:
        Zero, one or two fragments of source, in chronological order
    """
    if removal.end <= source.start or removal.start >= source.end:
        return [source]

    fragments: list[Interval] = []
    if removal.start > source.start:
        fragments.append(Interval(source.start, removal.start))
    if removal.end < source.end:
        fragments.append(Interval(removal.end, source.end))
    return fragments


def sort_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    return sorted(intervals, key=lambda interval: interval.start)


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Fold overlapping or touching intervals into a minimal ascending list."""
    merged: list[Interval] = []
    for interval in sort_intervals(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval(last.start, max(last.end, interval.end))
        else:
            merged.append(interval)
    return merged


def interval_duration(interval: Interval) -> int:
    return duration_minutes(interval.start, interval.end)


def has_minimum_duration(interval: Interval, minimum_minutes: int) -> bool:
    return interval_duration(interval) >= minimum_minutes
