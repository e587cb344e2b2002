"""
Block Store - The owned, in-memory collection of time blocks.

Holds every block for every day and keeps them non-overlapping after
structural edits. Enforces invariants:
- After move/reorder, sorted-by-start blocks never overlap
- Packing shifts blocks later but never changes a block's duration
- End time is strictly after start time

Single writer: callers serialize mutations (one event loop, one lock).
The store never persists anything; mutators return what changed so the
caller can write it back.
"""

import copy
import logging
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime

from daydeck.contracts.invariants import check_durations_preserved, check_packed
from daydeck.dates import format_instant, parse_date
from daydeck.models import TimeBlock, camel
from daydeck.timeline.intervals import is_valid_interval

logger = logging.getLogger(__name__)

NOT_FOUND = "Block not found"
INVALID_INTERVAL = "End time must be after start time"


@dataclass
class MoveResult:
    block_id: str
    success: bool
    message: str
    block: TimeBlock | None = None
    shifted: list[TimeBlock] = field(default_factory=list)


def pack_blocks(
    blocks: list[TimeBlock], anchor_id: str | None = None
) -> tuple[list[TimeBlock], list[TimeBlock]]:
    """
    Remove overlaps with one left-to-right sweep.

    Blocks are stable-sorted by start. A block that starts before the
    previous block's end is pushed to that end, keeping its duration.

    Args:
        blocks: Blocks in their current order
        anchor_id: Block that wins start-time ties (the one just moved)

    Returns:
        (all blocks sorted by start, the blocks that were shifted)
    """
    ordered = sorted(blocks, key=lambda b: (b.start, b.id != anchor_id))

    packed = []
    shifted = []
    previous_end: datetime | None = None

    for block in ordered:
        start = block.start
        end = block.end

        if previous_end is not None and start < previous_end:
            length = end - start
            start = previous_end.astimezone(start.tzinfo)
            end = start + length
            logger.debug(f"Shifting block {block.id} from {block.start_time} to {format_instant(start)}")
            block = replace(block, start_time=format_instant(start), end_time=format_instant(end))
            shifted.append(block)

        packed.append(block)
        previous_end = end

    return packed, shifted


class BlockStore:
    """
    Owns the authoritative list of time blocks.

    Responsibilities:
    - CRUD by block id (unknown ids are a reported no-op)
    - Move a block and push whatever it now overlaps
    - Full compaction pass over the whole collection
    - Date queries for the timeline view
    """

    def __init__(self, blocks: list[TimeBlock] | None = None):
        """
        Raises:
            ValueError: If a block has end <= start or an id appears twice
        """
        self._blocks: list[TimeBlock] = []
        for block in blocks or []:
            stored, msg = self.add(block)
            if stored is None:
                raise ValueError(f"Cannot load block {block.id}: {msg}")

    @classmethod
    def from_dicts(cls, rows: list[dict]) -> "BlockStore":
        """Hydrate from camelCase records (storage rows, JSON)."""
        return cls([TimeBlock.from_dict(row) for row in rows])

    def to_dicts(self) -> list[dict]:
        return [b.to_dict() for b in self._blocks]

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: str) -> bool:
        return self._index(block_id) is not None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all(self) -> list[TimeBlock]:
        """Copies of every block in store order."""
        return [copy.copy(b) for b in self._blocks]

    def get(self, block_id: str) -> TimeBlock | None:
        i = self._index(block_id)
        return copy.copy(self._blocks[i]) if i is not None else None

    def blocks_on(self, target_date: str | date) -> list[TimeBlock]:
        """Blocks starting on a date (in each block's own offset), ordered by start."""
        day = parse_date(target_date)
        on_day = [copy.copy(b) for b in self._blocks if b.start.date() == day]
        return sorted(on_day, key=lambda b: b.start)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, block: TimeBlock) -> tuple[TimeBlock | None, str]:
        """
        Add a block as-is. Adding does not pack; call reorder() for that.

        Returns:
            (TimeBlock or None, message)
        """
        if not is_valid_interval(block.start_time, block.end_time):
            return None, INVALID_INTERVAL
        if self._index(block.id) is not None:
            return None, f"Block {block.id} already exists"

        stored = copy.copy(block)
        self._blocks.append(stored)
        return copy.copy(stored), "Block added"

    def update(self, block_id: str, changes: dict) -> tuple[bool, str]:
        """
        Apply a partial update. Keys may be attribute names or camelCase.

        Does not pack; interval edits that should push neighbours go through move().

        Raises:
            ValueError: If a key is not a TimeBlock field, or tries to change the id
        """
        i = self._index(block_id)
        if i is None:
            return False, NOT_FOUND

        normalized = self._normalize_changes(changes)
        for name in ("start_time", "end_time"):
            if name in normalized:
                normalized[name] = _as_instant_string(normalized[name])
        updated = replace(self._blocks[i], **normalized)

        if not is_valid_interval(updated.start_time, updated.end_time):
            return False, INVALID_INTERVAL

        self._blocks[i] = updated
        return True, "Block updated"

    def remove(self, block_id: str) -> tuple[bool, str]:
        i = self._index(block_id)
        if i is None:
            return False, NOT_FOUND

        del self._blocks[i]
        return True, "Block removed"

    def move(self, block_id: str, new_start: str | datetime, new_end: str | datetime) -> MoveResult:
        """
        Give a block a new interval, then pack so nothing overlaps it.

        Blocks pushed out of the way keep their durations. The moved block
        itself can be shifted too if it now starts inside an earlier block.
        """
        i = self._index(block_id)
        if i is None:
            return MoveResult(block_id=block_id, success=False, message=NOT_FOUND)

        if not is_valid_interval(new_start, new_end):
            return MoveResult(block_id=block_id, success=False, message=INVALID_INTERVAL)

        self._blocks[i] = replace(
            self._blocks[i],
            start_time=_as_instant_string(new_start),
            end_time=_as_instant_string(new_end),
        )

        shifted = self._pack(anchor_id=block_id)
        return MoveResult(
            block_id=block_id,
            success=True,
            message=f"Block moved, {len(shifted)} shifted",
            block=self.get(block_id),
            shifted=shifted,
        )

    def reorder(self) -> list[TimeBlock]:
        """
        Compact the whole collection so no two blocks overlap.

        Returns:
            Copies of the blocks whose interval changed
        """
        return self._pack()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _pack(self, anchor_id: str | None = None) -> list[TimeBlock]:
        before = {b.id: b.duration for b in self._blocks}

        packed, shifted = pack_blocks(self._blocks, anchor_id=anchor_id)

        check_packed(packed)
        check_durations_preserved(before, packed)

        self._blocks = packed
        if shifted:
            logger.info(f"Reorder shifted {len(shifted)} of {len(packed)} blocks")
        return [copy.copy(b) for b in shifted]

    def _index(self, block_id: str) -> int | None:
        for i, block in enumerate(self._blocks):
            if block.id == block_id:
                return i
        return None

    @staticmethod
    def _normalize_changes(changes: dict) -> dict:
        by_key = {}
        for f in fields(TimeBlock):
            by_key[f.name] = f.name
            by_key[camel(f.name)] = f.name

        normalized = {}
        for key, value in changes.items():
            name = by_key.get(key)
            if name is None:
                raise ValueError(f"Unknown time block field: {key}")
            if name == "id":
                raise ValueError("Block id cannot be changed")
            normalized[name] = value
        return normalized


def _as_instant_string(value: str | datetime) -> str:
    if isinstance(value, datetime):
        return format_instant(value)
    return value
