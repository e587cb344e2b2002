from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "DAYDECK_HOME"
APP_ENV_SETTINGS = "DAYDECK_SETTINGS"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains daydeck/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    User-writable home for DayDeck.
    Override with DAYDECK_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".daydeck").resolve()


def settings_path() -> Path:
    """
    Settings file location.

    Resolution order:
    1. DAYDECK_SETTINGS env var (explicit override)
    2. ~/.daydeck/settings.yaml (user copy, if present)
    3. <project_root>/config/settings.yaml (shipped defaults)
    """
    if os.environ.get(APP_ENV_SETTINGS):
        return Path(os.environ[APP_ENV_SETTINGS]).expanduser().resolve()
    user_copy = app_home() / "settings.yaml"
    if user_copy.exists():
        return user_copy
    return project_root() / "config" / "settings.yaml"
