"""
Conflict Detector - Overlaps between owned time blocks and calendar events.

Calendar events are read-only; conflicts are only reported, never resolved.
Conflicts are derived data: recompute them whenever blocks or events change.
"""

import logging

from daydeck.dates import format_instant
from daydeck.models import CalendarEvent, Conflict, TimeBlock
from daydeck.timeline.intervals import overlap_window

logger = logging.getLogger(__name__)


def detect_conflicts(blocks: list[TimeBlock], events: list[CalendarEvent]) -> list[Conflict]:
    """
    Detect overlaps between time blocks and calendar events.

    Output order follows the nested walk: blocks outer, events inner.
    Adjacent intervals (block end == event start) are not conflicts.
    """
    conflicts = []

    # Parse events once; the inner loop runs per block
    parsed_events = [(event.id, event.start, event.end) for event in events]

    for block in blocks:
        block_start = block.start
        block_end = block.end

        for event_id, event_start, event_end in parsed_events:
            window = overlap_window(block_start, block_end, event_start, event_end)
            if window is None:
                continue

            conflicts.append(
                Conflict(
                    time_block_id=block.id,
                    calendar_event_id=event_id,
                    overlap_start_time=format_instant(window[0]),
                    overlap_end_time=format_instant(window[1]),
                )
            )

    if conflicts:
        logger.debug(f"{len(conflicts)} conflicts across {len(blocks)} blocks and {len(events)} events")
    return conflicts


def has_conflict(block_id: str, conflicts: list[Conflict]) -> bool:
    return any(c.time_block_id == block_id for c in conflicts)


def conflicting_event_ids(block_id: str, conflicts: list[Conflict]) -> list[str]:
    """Event ids in conflict with a block, in the order they appear in conflicts."""
    return [c.calendar_event_id for c in conflicts if c.time_block_id == block_id]
