"""Tests for constants and models."""

from lyric_looper.models import PlaybackState, PlayMode, Segment
from lyric_looper import constants


def test_segment_dataclass():
    """Segment fields exist and duration is end - start."""
    seg = Segment(start=1.5, end=4.0, text="Hello")
    assert seg.start == 1.5
    assert seg.end == 4.0
    assert seg.text == "Hello"
    assert seg.duration == 2.5


def test_segment_equality():
    """Segments compare by value."""
    assert Segment(0.0, 5.0, "a") == Segment(start=0.0, end=5.0, text="a")


def test_play_mode_values():
    """Mode values match the names used in settings files."""
    assert PlayMode("repeat") is PlayMode.REPEAT
    assert PlayMode("continuous") is PlayMode.CONTINUOUS


def test_playback_state_defaults():
    """No segment is current before the first activation; mode is repeat."""
    state = PlaybackState()
    assert state.current_index is None
    assert state.mode is PlayMode.REPEAT


def test_constants_exist():
    """All module-level constants are defined."""
    expected = [
        "DEFAULT_TAIL_SECONDS",
        "TICK_SECONDS",
        "SETTINGS_SUFFIX",
        "DEFAULT_MODE",
        "DEFAULT_START_INDEX",
        "DEFAULT_LYRICS_FILE",
        "VERSION",
    ]
    for name in expected:
        assert hasattr(constants, name), f"Missing constant: {name}"
    assert constants.DEFAULT_TAIL_SECONDS == 5.0
