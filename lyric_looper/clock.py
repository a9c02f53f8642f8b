"""Tick-driven audio clock implementing the time-source contract."""

import logging
from typing import Callable, Protocol

from pydub import AudioSegment

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one progress callback. Cancelling it is final."""

    def __init__(self, clock: "AudioClock", callback: Callable[[], None]):
        self._clock = clock
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        self._clock._remove(self)


class TimeSource(Protocol):
    """What SegmentPlayer needs from an audio element."""

    current_time: float
    paused: bool

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def subscribe(self, callback: Callable[[], None]) -> Subscription: ...


class AudioClock:
    """Media position that moves only when ``advance()`` is called.

    Behaves like an audio element: starts paused at 0, seeking fires a
    progress notification, and reaching the end of the media pauses it.
    ``duration=None`` means unbounded.
    """

    def __init__(self, duration: float | None = None):
        self.duration = duration
        self.paused = True
        self._position = 0.0
        self._subscriptions: list[Subscription] = []

    @classmethod
    def from_file(cls, path: str) -> "AudioClock":
        """Size a clock from an audio file's length."""
        audio = AudioSegment.from_file(path)
        duration = len(audio) / 1000
        logger.debug("Loaded %s (%.2fs)", path, duration)
        return cls(duration=duration)

    @property
    def current_time(self) -> float:
        return self._position

    @current_time.setter
    def current_time(self, value: float) -> None:
        self._position = self._clamp(value)
        self._notify()

    @property
    def ended(self) -> bool:
        return self.duration is not None and self._position >= self.duration

    def play(self) -> None:
        self.paused = False

    def pause(self) -> None:
        self.paused = True

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def advance(self, seconds: float) -> None:
        """Move playback forward and notify subscribers. No-op while paused."""
        if self.paused:
            return
        self._position = self._clamp(self._position + seconds)
        if self.ended:
            self.paused = True
        self._notify()

    def _clamp(self, value: float) -> float:
        value = max(0.0, float(value))
        if self.duration is not None:
            value = min(value, self.duration)
        return value

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _notify(self) -> None:
        # Snapshot: callbacks may cancel or subscribe during dispatch
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription.callback()
