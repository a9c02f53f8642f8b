"""Tests for settings module."""

import json
import logging

import pytest

from lyric_looper.models import PlayMode
from lyric_looper.settings import (
    DEFAULT_SETTINGS,
    load_settings,
    parse_mode,
    save_settings,
    settings_path,
)


def test_settings_path():
    """Sidecar sits next to the lyrics file with the extension replaced."""
    assert settings_path("songs/intro.lrc") == "songs/intro.player.json"
    assert settings_path("lyric") == "lyric.player.json"


def test_load_settings_missing(tmp_path):
    """No sidecar returns the defaults."""
    assert load_settings(str(tmp_path / "song.lrc")) == DEFAULT_SETTINGS


def test_load_settings_merges_defaults(tmp_path):
    """Sidecar values override defaults; unspecified keys keep defaults."""
    lyrics = tmp_path / "song.lrc"
    (tmp_path / "song.player.json").write_text(json.dumps({"mode": "continuous"}))
    settings = load_settings(str(lyrics))
    assert settings["mode"] == "continuous"
    assert settings["tail_seconds"] == DEFAULT_SETTINGS["tail_seconds"]
    assert settings["start"] == 0


def test_load_settings_malformed(tmp_path, caplog):
    """Malformed JSON logs a warning and falls back to defaults."""
    lyrics = tmp_path / "song.lrc"
    (tmp_path / "song.player.json").write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="lyric_looper.settings"):
        settings = load_settings(str(lyrics))
    assert settings == DEFAULT_SETTINGS
    assert "Malformed settings file" in caplog.text


def test_load_settings_not_object(tmp_path):
    lyrics = tmp_path / "song.lrc"
    (tmp_path / "song.player.json").write_text("[1, 2, 3]")
    assert load_settings(str(lyrics)) == DEFAULT_SETTINGS


def test_load_settings_returns_copy(tmp_path):
    """Mutating the result doesn't change the module defaults."""
    settings = load_settings(str(tmp_path / "song.lrc"))
    settings["mode"] = "continuous"
    assert DEFAULT_SETTINGS["mode"] == "repeat"


def test_save_and_reload(tmp_path):
    lyrics = str(tmp_path / "song.lrc")
    path = save_settings(lyrics, {"mode": "continuous", "tail_seconds": 3.0, "start": 2})
    assert path == str(tmp_path / "song.player.json")
    settings = load_settings(lyrics)
    assert settings == {"mode": "continuous", "tail_seconds": 3.0, "start": 2}


def test_parse_mode():
    assert parse_mode("repeat") is PlayMode.REPEAT
    assert parse_mode(" Continuous ") is PlayMode.CONTINUOUS


def test_parse_mode_invalid():
    with pytest.raises(ValueError, match="Invalid mode: shuffle"):
        parse_mode("shuffle")
