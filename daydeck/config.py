"""
Centralized configuration for DayDeck.

Two layers:
- Deployment constants below, overridable via environment variables.
- User settings (day bounds, quiet hours, carry-over behavior) loaded from
  config/settings.yaml. Falls back to hardcoded defaults if the file or a
  key is missing.
"""

import logging
import os
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path

import yaml

from daydeck import paths

logger = logging.getLogger(__name__)

# ============================================================
# Recurrence
# ============================================================

RECURRENCE_MAX_OCCURRENCES: int = int(os.environ.get("DAYDECK_RECURRENCE_MAX_OCCURRENCES", "5000"))
"""Upper bound on dates produced by one range expansion."""

# ============================================================
# Formats
# ============================================================

DATE_FORMAT: str = "%Y-%m-%d"
TIME_FORMAT: str = "%H:%M"


# ============================================================
# User settings
# ============================================================


class CarryOverBehavior(StrEnum):
    AUTO = "auto"  # carry over silently on startup
    ASK = "ask"  # offer the candidates, apply on confirmation
    NEVER = "never"


@dataclass(frozen=True)
class Settings:
    day_start_hour: int = 7
    day_end_hour: int = 23
    default_task_duration_minutes: int = 30
    quiet_hours_start: str = "22:00"
    quiet_hours_end: str = "07:00"
    carry_over_behavior: CarryOverBehavior = CarryOverBehavior.AUTO
    reminder_offset_minutes: int = 15
    calendar_sync_enabled: bool = False


def load_settings(path: Path | None = None) -> Settings:
    """
    Load user settings from YAML.

    Args:
        path: Settings file (defaults to paths.settings_path())

    Returns:
        Settings with file values layered over the defaults

    Raises:
        ValueError: If carry_over_behavior is not auto/ask/never
    """
    if path is None:
        path = paths.settings_path()

    raw = _read_yaml(path)

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning(f"Ignoring unknown settings in {path}: {', '.join(unknown)}")

    values = {k: v for k, v in raw.items() if k in known}
    if "carry_over_behavior" in values:
        values["carry_over_behavior"] = CarryOverBehavior(values["carry_over_behavior"])

    return Settings(**values)


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        logger.info(f"Settings file not found at {path}, using defaults")
        return {}

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return data
