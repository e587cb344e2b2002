"""
Test configuration - ensures repo root is in sys.path + determinism guards.

This allows tests to import daydeck.* without installing the package.
Enforces determinism by pointing DAYDECK_HOME at a temp dir so no test reads
the developer's own ~/.daydeck/settings.yaml.
"""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from daydeck.models import CalendarEvent, Recurrence, Task, TimeBlock  # noqa: E402


# =============================================================================
# DETERMINISM GUARD: isolate user settings
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Every test gets an empty DAYDECK_HOME and no settings override."""
    monkeypatch.setenv("DAYDECK_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("DAYDECK_SETTINGS", raising=False)
    return tmp_path / "home"


# =============================================================================
# RECORD FACTORIES
# =============================================================================


@pytest.fixture
def make_task():
    def _make(**overrides) -> Task:
        fields = {
            "id": "task-1",
            "title": "Test task",
            "status": "todo",
            "priority": "medium",
            "scheduled_date": "2026-01-05",
            "created_at": "2026-01-01T00:00:00.000Z",
            "updated_at": "2026-01-01T00:00:00.000Z",
        }
        fields.update(overrides)
        return Task(**fields)

    return _make


@pytest.fixture
def make_block():
    def _make(block_id="block-1", start="2026-01-05T09:00:00.000Z", end="2026-01-05T10:00:00.000Z", **kw):
        return TimeBlock(id=block_id, title=kw.pop("title", "Block"), start_time=start, end_time=end, **kw)

    return _make


@pytest.fixture
def make_event():
    def _make(event_id="event-1", start="2026-01-05T09:00:00.000Z", end="2026-01-05T10:00:00.000Z", **kw):
        return CalendarEvent(
            id=event_id,
            title=kw.pop("title", "Meeting"),
            start_time=start,
            end_time=end,
            calendar_id=kw.pop("calendar_id", "cal-1"),
            **kw,
        )

    return _make


@pytest.fixture
def weekly():
    def _make(interval=1, days=None, end_date=None) -> Recurrence:
        return Recurrence(frequency="weekly", interval=interval, days_of_week=days, end_date=end_date)

    return _make
