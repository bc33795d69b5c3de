"""
Unit tests for interval arithmetic helpers.
"""

from datetime import datetime, timezone

from dayplan.utils.intervals import TimeInterval, merge_intervals, subtract_intervals


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)


def test_merge_joins_overlapping_and_touching():
    merged = merge_intervals(
        [
            TimeInterval(at(10, 0), at(10, 30)),
            TimeInterval(at(9, 0), at(9, 30)),
            TimeInterval(at(9, 15), at(9, 45)),
            TimeInterval(at(9, 45), at(10, 0)),
        ]
    )

    assert [(i.start, i.end) for i in merged] == [(at(9, 0), at(10, 30))]


def test_merge_keeps_disjoint_and_drops_empty():
    merged = merge_intervals(
        [
            TimeInterval(at(11, 0), at(11, 0)),
            TimeInterval(at(9, 0), at(9, 30)),
            TimeInterval(at(10, 0), at(10, 30)),
        ]
    )

    assert [(i.start, i.end) for i in merged] == [
        (at(9, 0), at(9, 30)),
        (at(10, 0), at(10, 30)),
    ]


def test_merge_marks_idle_when_any_source_is_idle():
    merged = merge_intervals(
        [
            TimeInterval(at(9, 0), at(9, 30)),
            TimeInterval(at(9, 20), at(9, 50), idle=True),
        ]
    )

    assert len(merged) == 1
    assert merged[0].idle is True


def test_subtract_splits_base_in_two():
    pieces = subtract_intervals(
        TimeInterval(at(9, 0), at(10, 0)),
        [TimeInterval(at(9, 20), at(9, 40))],
    )

    assert [(i.start, i.end) for i in pieces] == [
        (at(9, 0), at(9, 20)),
        (at(9, 40), at(10, 0)),
    ]


def test_subtract_fully_covered_base_is_empty():
    pieces = subtract_intervals(
        TimeInterval(at(9, 0), at(10, 0)),
        [TimeInterval(at(8, 0), at(11, 0))],
    )

    assert pieces == []


def test_subtract_ignores_empty_and_unrelated_removals():
    pieces = subtract_intervals(
        TimeInterval(at(9, 0), at(10, 0)),
        [TimeInterval(at(9, 30), at(9, 30)), TimeInterval(at(11, 0), at(12, 0))],
    )

    assert [(i.start, i.end) for i in pieces] == [(at(9, 0), at(10, 0))]
