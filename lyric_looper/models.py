"""Data models for timed lyric playback."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Segment:
    start: float       # seconds
    end: float         # seconds, start of the next segment
    text: str

    @property
    def duration(self) -> float:
        return self.end - self.start


class PlayMode(Enum):
    REPEAT = "repeat"            # loop the current segment
    CONTINUOUS = "continuous"    # advance through all segments


@dataclass
class PlaybackState:
    current_index: int | None = None   # None until the first activation
    mode: PlayMode = PlayMode.REPEAT
