"""
Timeline Module - The temporal scheduling engine.

Objects:
- Recurrence expansion (dates only, never new tasks)
- Conflicts between time blocks and external calendar events
- BlockStore (the owned block collection) and overlap packing
- Carry-over of unfinished past tasks, with undo
- Day templates applied to and captured from the timeline

Invariants:
- Intervals are half-open: touching endpoints never overlap
- Time blocks never overlap after a move or reorder
- Packing preserves every block's duration
- Calendar events are never mutated
- carriedOverFrom keeps the earliest origin
"""

from .block_store import BlockStore, MoveResult, pack_blocks
from .carry_over import (
    CarryOver,
    CarryOverReport,
    CarryOverResult,
    carry_over,
    carry_over_candidates,
    clear_carry_over_badge,
    undo_carry_over,
)
from .conflicts import conflicting_event_ids, detect_conflicts, has_conflict
from .day_plan import build_day_plan, tasks_on
from .intervals import duration, is_valid_interval, overlap_window, overlaps
from .quiet_hours import is_in_quiet_hours, is_quiet
from .recurrence import next_occurrence, next_task_occurrence, occurrences_in_range, task_occurrences
from .templates import DEFAULT_TEMPLATES, apply_template, default_templates, template_from_day

__all__ = [
    "BlockStore",
    "MoveResult",
    "pack_blocks",
    "CarryOver",
    "CarryOverReport",
    "CarryOverResult",
    "carry_over",
    "carry_over_candidates",
    "clear_carry_over_badge",
    "undo_carry_over",
    "detect_conflicts",
    "has_conflict",
    "conflicting_event_ids",
    "build_day_plan",
    "tasks_on",
    "overlaps",
    "overlap_window",
    "duration",
    "is_valid_interval",
    "is_in_quiet_hours",
    "is_quiet",
    "next_occurrence",
    "occurrences_in_range",
    "next_task_occurrence",
    "task_occurrences",
    "DEFAULT_TEMPLATES",
    "apply_template",
    "default_templates",
    "template_from_day",
]
