"""
Carry-Over - Roll unfinished past tasks forward to a new date.

Runs once at startup to:
1. Find open tasks (todo / in_progress) scheduled before today
2. Move them to the target date, remembering where they first came from
3. Keep snapshots so the whole move can be undone

The transforms are pure: inputs are never mutated and every returned task
is an independent deep copy. Writing results back to storage is the
caller's job.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

from daydeck.config import CarryOverBehavior, Settings, load_settings
from daydeck.dates import format_date
from daydeck.models import Task

logger = logging.getLogger(__name__)


@dataclass
class CarryOverResult:
    carried_over: list[Task]  # moved copies, index-aligned with the candidates
    original_snapshots: list[Task]  # pre-move copies, for undo


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def carry_over_candidates(tasks: list[Task], today: str | date) -> list[Task]:
    """
    Tasks eligible for carry-over: scheduled before today and still open.

    Done and cancelled tasks, unscheduled tasks, and anything scheduled today
    or later stay put.
    Input order is preserved.
    """
    today_str = format_date(today)
    return [t for t in tasks if t.scheduled_date and t.scheduled_date < today_str and t.is_open]


def carry_over(candidates: list[Task], target_date: str | date, now: str | None = None) -> CarryOverResult:
    """
    Move candidates to target_date.

    carried_over_from keeps the earliest origin: a task carried over twice
    still points at its first scheduled date.

    Args:
        candidates: Tasks to move (usually from carry_over_candidates)
        target_date: New scheduled date
        now: Timestamp for updated_at (defaults to the current UTC time)

    Returns:
        CarryOverResult with moved copies and untouched snapshots
    """
    target = format_date(target_date)
    now = now or _now_iso()

    original_snapshots = [t.copy() for t in candidates]

    carried_over = []
    for task in candidates:
        moved = task.copy()
        moved.carried_over_from = (
            task.carried_over_from if task.carried_over_from is not None else task.scheduled_date
        )
        moved.scheduled_date = target
        moved.updated_at = now
        carried_over.append(moved)
        logger.debug(f"Carry-over {task.id}: {task.scheduled_date} -> {target}")

    return CarryOverResult(carried_over=carried_over, original_snapshots=original_snapshots)


def undo_carry_over(original_snapshots: list[Task]) -> list[Task]:
    """Restore the pre-carry-over tasks exactly, as fresh copies."""
    return [t.copy() for t in original_snapshots]


def clear_carry_over_badge(task: Task, now: str | None = None) -> Task:
    """Forget the carry-over origin (the user acknowledged it). Input is not mutated."""
    cleared = task.copy()
    cleared.carried_over_from = None
    cleared.updated_at = now or _now_iso()
    return cleared


# =============================================================================
# STARTUP RUNNER
# =============================================================================


@dataclass
class CarryOverReport:
    today: str
    behavior: CarryOverBehavior
    candidates: list[Task] = field(default_factory=list)
    carried_over: list[Task] = field(default_factory=list)
    original_snapshots: list[Task] = field(default_factory=list)
    applied: bool = False

    @property
    def needs_confirmation(self) -> bool:
        """Candidates are waiting for the user to say yes."""
        return not self.applied and bool(self.candidates)

    @property
    def can_undo(self) -> bool:
        return self.applied and bool(self.original_snapshots)


class CarryOver:
    """
    Routes the startup carry-over through the user's carry_over_behavior.

    - auto: move candidates to today straight away
    - ask: report the candidates; confirm() applies them
    - never: do nothing

    The setting is the decision; this class only calls the pure transforms.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or load_settings()

    def run(self, tasks: list[Task], today: str | date, now: str | None = None) -> CarryOverReport:
        """
        Execute the startup carry-over.

        Args:
            tasks: Every task the caller knows about
            today: Date to carry over TO
            now: Timestamp for updated_at

        Returns:
            CarryOverReport with results
        """
        today_str = format_date(today)
        behavior = self.settings.carry_over_behavior

        if behavior == CarryOverBehavior.NEVER:
            return CarryOverReport(today=today_str, behavior=behavior)

        candidates = carry_over_candidates(tasks, today_str)
        report = CarryOverReport(today=today_str, behavior=behavior, candidates=candidates)

        if not candidates:
            return report

        if behavior == CarryOverBehavior.ASK:
            logger.info(f"{len(candidates)} unfinished tasks from previous days awaiting confirmation")
            return report

        return self.confirm(report, now=now)

    def confirm(self, report: CarryOverReport, now: str | None = None) -> CarryOverReport:
        """Apply a pending report (from ask mode). Already-applied reports are returned unchanged."""
        if report.applied:
            return report

        result = carry_over(report.candidates, report.today, now=now)
        logger.info(f"Carried over {len(result.carried_over)} tasks to {report.today}")

        return replace(
            report,
            carried_over=result.carried_over,
            original_snapshots=result.original_snapshots,
            applied=True,
        )

    def undo(self, report: CarryOverReport) -> list[Task]:
        """Tasks to write back to reverse an applied report. Empty if nothing was applied."""
        if not report.can_undo:
            return []
        restored = undo_carry_over(report.original_snapshots)
        logger.info(f"Undid carry-over of {len(restored)} tasks")
        return restored
