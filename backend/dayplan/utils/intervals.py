"""
Half-open interval arithmetic on absolute instants.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TimeInterval:
    start: datetime
    end: datetime
    idle: bool = False

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


def merge_intervals(intervals: list[TimeInterval]) -> list[TimeInterval]:
    """
    Merge overlapping or touching intervals into a sorted disjoint list.

    A merged interval is idle if any of its sources was idle. Empty inputs
    are dropped.
    """
    ordered = sorted(
        (interval for interval in intervals if not interval.is_empty),
        key=lambda entry: (entry.start, entry.end),
    )
    merged: list[TimeInterval] = []
    for interval in ordered:
        if merged and interval.start <= merged[-1].end:
            merged[-1].end = max(merged[-1].end, interval.end)
            merged[-1].idle = merged[-1].idle or interval.idle
        else:
            merged.append(TimeInterval(interval.start, interval.end, interval.idle))
    return merged


def subtract_intervals(base: TimeInterval, remove: list[TimeInterval]) -> list[TimeInterval]:
    """
    Remove every interval in `remove` from `base`.

    One removal in the middle of `base` splits it in two; the result is
    sorted and contains no empty pieces.
    """
    if base.is_empty:
        return []
    intervals = [TimeInterval(base.start, base.end)]
    for block in remove:
        if block.is_empty:
            continue
        next_intervals: list[TimeInterval] = []
        for interval in intervals:
            if block.end <= interval.start or block.start >= interval.end:
                next_intervals.append(interval)
                continue
            if block.start > interval.start:
                next_intervals.append(TimeInterval(interval.start, min(block.start, interval.end)))
            if block.end < interval.end:
                next_intervals.append(TimeInterval(max(block.end, interval.start), interval.end))
        intervals = next_intervals
    intervals.sort(key=lambda entry: entry.start)
    return [interval for interval in intervals if not interval.is_empty]
