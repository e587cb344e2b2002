"""
Invariants Module - Timeline correctness checks.

These run in production, not just tests: the block store checks them after
every pack and refuses to leave a violating schedule in place.
"""

from datetime import timedelta

from daydeck.models import TimeBlock


class InvariantViolation(Exception):
    """Raised when a timeline invariant is violated."""

    pass


def check_packed(blocks: list[TimeBlock]) -> None:
    """
    INVARIANT: sorted by start, each block starts at or after the previous end.

    Raises:
        InvariantViolation: If two consecutive blocks overlap
    """
    ordered = sorted(blocks, key=lambda b: b.start)
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.start < prev.end:
            raise InvariantViolation(
                f"Blocks overlap after packing: {prev.id} ends {prev.end_time}, "
                f"{curr.id} starts {curr.start_time}"
            )


def check_durations_preserved(before: dict[str, timedelta], blocks: list[TimeBlock]) -> None:
    """
    INVARIANT: packing shifts blocks but never stretches or truncates them.

    Args:
        before: block id -> duration captured before the operation
        blocks: blocks after the operation

    Raises:
        InvariantViolation: If any block's duration changed
    """
    for block in blocks:
        expected = before.get(block.id)
        if expected is not None and block.duration != expected:
            raise InvariantViolation(
                f"Block {block.id} duration changed from {expected} to {block.duration}"
            )
