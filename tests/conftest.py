"""Shared fixtures for lyric looper tests."""

import pytest
from pydub import AudioSegment

from lyric_looper.clock import AudioClock
from lyric_looper.models import Segment


class RecordingClock(AudioClock):
    """AudioClock that logs every command the player issues."""

    def __init__(self, duration=None):
        super().__init__(duration=duration)
        self.commands = []

    @property
    def current_time(self):
        return self._position

    @current_time.setter
    def current_time(self, value):
        self.commands.append(("seek", value))
        AudioClock.current_time.fset(self, value)

    def play(self):
        self.commands.append("play")
        super().play()

    def pause(self):
        self.commands.append("pause")
        super().pause()


@pytest.fixture
def clock():
    """Unbounded clock that records play/pause/seek commands."""
    return RecordingClock()


@pytest.fixture
def tiny_wav(tmp_path):
    """Generate a 3s silent WAV for testing."""
    path = tmp_path / "test.wav"
    silence = AudioSegment.silent(duration=3000)
    silence.export(str(path), format="wav")
    return path


@pytest.fixture
def sample_segments():
    """Three contiguous segments: 0-2, 2-4, 4-9."""
    return [
        Segment(start=0.0, end=2.0, text="first"),
        Segment(start=2.0, end=4.0, text="second"),
        Segment(start=4.0, end=9.0, text="third"),
    ]


@pytest.fixture
def lyrics_file(tmp_path):
    """Write a small .lrc file matching sample_segments."""
    path = tmp_path / "song.lrc"
    path.write_text("[00:00.00]first\n[00:02.00]second\n[00:04.00]third\n")
    return path
