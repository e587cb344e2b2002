"""
Day Templates - Reusable day layouts stamped onto the timeline.

A template stores blocks by wall-clock time (start hour/minute + duration),
not by instant, so it can be applied to any date:
1. apply_template() turns each template block into a TimeBlock on a date
2. template_from_day() captures a date's blocks as a new template
3. default_templates() seeds the starter set for a fresh install

Applying adds blocks as-is, like BlockStore.add(); call reorder() on the
store to pack them against blocks already on the day.
"""

import logging
import math
import uuid
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from daydeck.dates import format_date, format_instant, parse_date
from daydeck.models import Template, TemplateBlock, TimeBlock
from daydeck.timeline.block_store import BlockStore

logger = logging.getLogger(__name__)

MIN_TEMPLATE_BLOCK_MINUTES = 15

DEFAULT_TEMPLATES = [
    {
        "name": "Morning Routine",
        "icon": "\U0001F305",
        "blocks": [
            {"title": "Wake up & stretch", "type": "break", "startHour": 6, "startMinute": 0, "durationMinutes": 30, "color": "#34D399"},
            {"title": "Breakfast", "type": "break", "startHour": 6, "startMinute": 30, "durationMinutes": 30, "color": "#34D399"},
            {"title": "Daily planning", "type": "focus", "startHour": 7, "startMinute": 0, "durationMinutes": 30, "color": "#FBBF24"},
        ],
    },
    {
        "name": "Deep Work",
        "icon": "\U0001F9E0",
        "blocks": [
            {"title": "Focus block 1", "type": "focus", "startHour": 9, "startMinute": 0, "durationMinutes": 90, "color": "#FBBF24"},
            {"title": "Short break", "type": "break", "startHour": 10, "startMinute": 30, "durationMinutes": 15, "color": "#34D399"},
            {"title": "Focus block 2", "type": "focus", "startHour": 10, "startMinute": 45, "durationMinutes": 75, "color": "#FBBF24"},
        ],
    },
    {
        "name": "Afternoon Sprint",
        "icon": "\u26A1",
        "blocks": [
            {"title": "Task block 1", "type": "task", "startHour": 13, "startMinute": 0, "durationMinutes": 90, "color": "#818CF8"},
            {"title": "Break", "type": "break", "startHour": 14, "startMinute": 30, "durationMinutes": 15, "color": "#34D399"},
            {"title": "Task block 2", "type": "task", "startHour": 14, "startMinute": 45, "durationMinutes": 90, "color": "#818CF8"},
            {"title": "Wrap up", "type": "task", "startHour": 16, "startMinute": 15, "durationMinutes": 45, "color": "#818CF8"},
        ],
    },
    {
        "name": "Evening Wind Down",
        "icon": "\U0001F319",
        "blocks": [
            {"title": "Day review", "type": "task", "startHour": 19, "startMinute": 0, "durationMinutes": 30, "color": "#818CF8"},
            {"title": "Light tasks", "type": "task", "startHour": 19, "startMinute": 30, "durationMinutes": 30, "color": "#818CF8"},
            {"title": "Relax", "type": "break", "startHour": 20, "startMinute": 0, "durationMinutes": 60, "color": "#34D399"},
        ],
    },
]


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def default_templates(now: str | None = None) -> list[Template]:
    """Fresh copies of the starter templates, each with a new id."""
    now = now or _now_iso()
    return [
        Template.from_dict({**seed, "id": _new_id("template"), "createdAt": now, "updatedAt": now})
        for seed in DEFAULT_TEMPLATES
    ]


def apply_template(
    template: Template,
    target_date: str | date,
    store: BlockStore,
    tz: tzinfo = UTC,
) -> list[TimeBlock]:
    """
    Add a template's blocks to the store on target_date.

    Args:
        template: Template to apply
        target_date: Day to place the blocks on
        store: Block store receiving the new blocks
        tz: Zone the template's wall-clock times are read in

    Returns:
        The blocks that were added, in template order
    """
    day = parse_date(target_date)
    midnight = datetime.combine(day, time.min, tzinfo=tz)

    existing = len(store.blocks_on(day))
    if existing:
        logger.info(f"Applying {template.name!r} to {format_date(day)}, which already has {existing} blocks")

    added = []
    for entry in template.blocks:
        start = midnight + timedelta(hours=entry.start_hour, minutes=entry.start_minute)
        end = start + timedelta(minutes=entry.duration_minutes)
        block, msg = store.add(
            TimeBlock(
                id=_new_id("block"),
                title=entry.title,
                start_time=format_instant(start),
                end_time=format_instant(end),
                task_id=None,
                color=entry.color,
                type=entry.type,
            )
        )
        if block is None:
            logger.warning(f"Skipped template block {entry.title!r} of {template.name!r}: {msg}")
            continue
        added.append(block)

    logger.info(f"Applied template {template.name!r}: {len(added)} blocks on {format_date(day)}")
    return added


def template_from_day(
    store: BlockStore,
    target_date: str | date,
    name: str | None = None,
    icon: str = "\u2B50",
    now: str | None = None,
) -> Template | None:
    """
    Capture a day's blocks as a template.

    Start times are read on each block's own clock. Durations round to the
    nearest minute and never go below MIN_TEMPLATE_BLOCK_MINUTES.

    Returns:
        New Template, or None if the day has no blocks
    """
    day = parse_date(target_date)
    blocks = store.blocks_on(day)
    if not blocks:
        return None

    entries = []
    for block in blocks:
        minutes = block.duration.total_seconds() / 60
        entries.append(
            TemplateBlock(
                title=block.title,
                type=block.type,
                start_hour=block.start.hour,
                start_minute=block.start.minute,
                duration_minutes=max(MIN_TEMPLATE_BLOCK_MINUTES, math.floor(minutes + 0.5)),
                color=block.color,
            )
        )

    now = now or _now_iso()
    return Template(
        id=_new_id("template"),
        name=name or f"My {day.strftime('%A')} Plan",
        icon=icon,
        blocks=entries,
        created_at=now,
        updated_at=now,
    )
