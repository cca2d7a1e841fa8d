"""
Note settings - process-wide defaults for duration and velocity.

Notes created without an explicit duration or velocity read these values.
Settings are set once at startup (in code or from a YAML file) and read
everywhere else.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NoteSettings(BaseModel):
    """Defaults applied to notes that do not specify their own values."""

    default_duration: float = Field(0.25, gt=0, description="Duration as a fraction of a whole")
    default_on_velocity: int = Field(64, ge=0, le=127, description="Note-on velocity")
    default_off_velocity: int = Field(64, ge=0, le=127, description="Note-off velocity")

    model_config = {"frozen": True}


_lock = threading.Lock()
_settings = NoteSettings()


def get_note_settings() -> NoteSettings:
    """Get the current process-wide note settings."""
    return _settings


def configure_note_settings(settings: NoteSettings | None = None, **overrides: Any) -> NoteSettings:
    """
    Replace the process-wide note settings.

    Args:
        settings: Complete settings to install (defaults to the current ones)
        **overrides: Individual fields to change, e.g. default_duration=0.5

    Returns:
        The installed settings
    """
    global _settings
    with _lock:
        base = settings or _settings
        if overrides:
            base = NoteSettings.model_validate({**base.model_dump(), **overrides})
        _settings = base
    logger.debug("Note settings updated: %s", _settings)
    return _settings


def reset_note_settings() -> NoteSettings:
    """Restore the built-in defaults."""
    return configure_note_settings(NoteSettings())


def load_note_settings(path: Path) -> NoteSettings:
    """
    Load note settings from a YAML file and install them.

    The keys may sit at the top level or under a ``notes:`` section.

    Args:
        path: YAML file

    Returns:
        The installed settings
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if isinstance(data, dict) and isinstance(data.get("notes"), dict):
        data = data["notes"]

    settings = NoteSettings.model_validate(data)
    logger.info("Loaded note settings from %s", path)
    return configure_note_settings(settings)
