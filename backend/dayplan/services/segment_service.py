"""
Segment generation service.

Turns the day template into an ordered sequence of work, break and
appointment segments. Fixed appointments are merged first and then carved
out of every schedulable block.
"""

from datetime import date, timedelta
from typing import Any, Optional

from dayplan.core.config import get_settings
from dayplan.core.exceptions import ValidationError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import (
    APPOINTMENT_CATEGORY,
    IDLE_CATEGORY,
    DayCategory,
    SegmentKind,
)
from dayplan.models.timeline import Appointment, DayBlock, Segment
from dayplan.utils.datetime_utils import day_minutes_to_utc
from dayplan.utils.intervals import TimeInterval, merge_intervals, subtract_intervals

logger = setup_logger(__name__)


class SegmentService:
    """
    Service for splitting a day template into schedulable segments.

    Output is a pure function of the inputs: identical blocks, appointments
    and day always give identical segments, so callers may regenerate freely.
    """

    def __init__(
        self,
        work_minutes: Optional[int] = None,
        break_minutes: Optional[int] = None,
    ):
        """
        Initialize segment service.

        Args:
            work_minutes: Length of a work unit (None = Settings.WORK_MINUTES)
            break_minutes: Length of the break after a work unit (None = Settings.BREAK_MINUTES)
        """
        settings = get_settings()
        self.work_minutes = work_minutes if work_minutes is not None else settings.WORK_MINUTES
        self.break_minutes = break_minutes if break_minutes is not None else settings.BREAK_MINUTES
        if self.work_minutes <= 0 or self.break_minutes < 0:
            raise ValidationError(
                "Work length must be positive and break length non-negative",
                details={"work_minutes": self.work_minutes, "break_minutes": self.break_minutes},
            )

    def build_exclusions(self, appointments: list[Appointment]) -> list[TimeInterval]:
        """Merge appointment ranges into a minimal sorted disjoint set."""
        intervals: list[TimeInterval] = []
        for appointment in appointments:
            if appointment.duration_minutes <= 0:
                logger.debug(
                    f"Skipping appointment {appointment.id or '?'} with "
                    f"non-positive duration {appointment.duration_minutes}"
                )
                continue
            intervals.append(
                TimeInterval(
                    appointment.start,
                    appointment.start + timedelta(minutes=appointment.duration_minutes),
                    idle=appointment.idle,
                )
            )
        return merge_intervals(intervals)

    def generate_segments(
        self,
        blocks: list[DayBlock],
        appointments: list[Appointment],
        day: date,
        timezone: Optional[str] = None,
    ) -> list[Segment]:
        """
        Generate the day's segment sequence.

        Args:
            blocks: Day template blocks ("HH:MM" ranges in the user's timezone)
            appointments: Fixed commitments for the same day
            day: Calendar date the template applies to
            timezone: IANA timezone of the template (None = Settings.TIMEZONE)

        Returns:
            Segments sorted by start, each carrying its global index.
        """
        tz_name = timezone or get_settings().TIMEZONE
        exclusions = self.build_exclusions(appointments)

        drafts: list[dict[str, Any]] = []
        for interval in exclusions:
            drafts.append(
                {
                    "parent_block_id": None,
                    "kind": SegmentKind.IDLE if interval.idle else SegmentKind.APPOINTMENT,
                    "start": interval.start,
                    "end": interval.end,
                    "category": IDLE_CATEGORY if interval.idle else APPOINTMENT_CATEGORY,
                }
            )

        for block in blocks:
            if block.category == DayCategory.REST:
                continue
            start_minutes = block.start_minutes
            end_minutes = block.end_minutes
            if end_minutes <= start_minutes:
                logger.debug(f"Skipping block {block.id}: {block.start}-{block.end} is empty")
                continue
            base = TimeInterval(
                day_minutes_to_utc(day, start_minutes, tz_name),
                day_minutes_to_utc(day, end_minutes, tz_name),
            )
            for available in subtract_intervals(base, exclusions):
                drafts.extend(self._split_range(block, available))

        drafts.sort(key=lambda draft: (draft["start"], draft["end"]))

        segments: list[Segment] = []
        work_counts: dict[str, int] = {}
        for global_index, draft in enumerate(drafts):
            sequence_index: Optional[int] = None
            if draft["kind"] == SegmentKind.WORK:
                category = draft["category"]
                work_counts[category] = work_counts.get(category, 0) + 1
                sequence_index = work_counts[category]
            segments.append(
                Segment(global_index=global_index, sequence_index=sequence_index, **draft)
            )

        logger.info(
            f"Generated {len(segments)} segments for {day} "
            f"({sum(work_counts.values())} work units, {len(exclusions)} exclusions)"
        )
        return segments

    def _split_range(self, block: DayBlock, available: TimeInterval) -> list[dict[str, Any]]:
        """
        Lay work+break pairs from the left edge, then a trailing bare work unit.

        A pair is laid only while strictly more than a pair's length is left,
        so a range always closes with a bare work unit when one fits; a
        09:00-10:00 range gives work, break, work and leaves 09:55-10:00 idle.
        """
        work = timedelta(minutes=self.work_minutes)
        rest = timedelta(minutes=self.break_minutes)
        category = block.category.value
        pieces: list[dict[str, Any]] = []

        cursor = available.start
        # Strict: a range of exactly work+break holds one bare work unit, not a pair
        while available.end - cursor > work + rest:
            pieces.append(self._draft(block.id, SegmentKind.WORK, cursor, cursor + work, category))
            cursor += work
            if rest:
                pieces.append(self._draft(block.id, SegmentKind.BREAK, cursor, cursor + rest, category))
                cursor += rest

        if available.end - cursor >= work:
            pieces.append(self._draft(block.id, SegmentKind.WORK, cursor, cursor + work, category))
        return pieces

    @staticmethod
    def _draft(parent_block_id, kind, start, end, category) -> dict[str, Any]:
        return {
            "parent_block_id": parent_block_id,
            "kind": kind,
            "start": start,
            "end": end,
            "category": category,
        }
