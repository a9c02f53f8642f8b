"""Per-lyrics playback settings stored in a JSON sidecar file."""

import json
import logging
import os

from lyric_looper.constants import (
    DEFAULT_MODE,
    DEFAULT_START_INDEX,
    DEFAULT_TAIL_SECONDS,
    SETTINGS_SUFFIX,
)
from lyric_looper.models import PlayMode

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "mode": DEFAULT_MODE,
    "tail_seconds": DEFAULT_TAIL_SECONDS,
    "start": DEFAULT_START_INDEX,
}


def settings_path(lyrics_path: str) -> str:
    """Sidecar path for a lyrics file.

    "songs/intro.lrc" → "songs/intro.player.json"
    """
    return os.path.splitext(lyrics_path)[0] + SETTINGS_SUFFIX


def load_settings(lyrics_path: str) -> dict:
    """Load the sidecar next to a lyrics file, merged over the defaults.

    Returns defaults if the sidecar is missing or malformed.
    """
    path = settings_path(lyrics_path)
    if not os.path.exists(path):
        return dict(DEFAULT_SETTINGS)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Malformed settings file: %s — using defaults", path)
        return dict(DEFAULT_SETTINGS)
    if not isinstance(data, dict):
        logger.warning("Settings file is not an object: %s — using defaults", path)
        return dict(DEFAULT_SETTINGS)
    return {**DEFAULT_SETTINGS, **data}


def save_settings(lyrics_path: str, settings: dict) -> str:
    """Write settings to the sidecar. Returns the path written."""
    path = settings_path(lyrics_path)
    with open(path, "w") as f:
        json.dump(settings, f, indent=2)
    return path


def parse_mode(value: str) -> PlayMode:
    """Convert a mode name (any case) to PlayMode. Raises ValueError if unknown."""
    try:
        return PlayMode(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in PlayMode)
        raise ValueError(f"Invalid mode: {value} (expected one of: {valid})") from None
